#!/usr/bin/env python3
"""Thin executable entrypoint for the subagent viewer."""

from __future__ import annotations

from viewer_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
