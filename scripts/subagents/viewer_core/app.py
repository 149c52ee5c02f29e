"""Subagent viewer entrypoint."""

from __future__ import annotations

import argparse
import json
import os
import time
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.layout import Layout
from rich.live import Live

from viewer_core.collectors.sessions import claude_project_dir
from viewer_core.controller import ViewerController, start_watch
from viewer_core.errors import StartupError
from viewer_core.events import KeyPressed, Resized
from viewer_core.layout import select_layout_mode, sidebar_width
from viewer_core.log import configure_logging, get_logger
from viewer_core.panels.activity import render as render_activity
from viewer_core.panels.header import render as render_header
from viewer_core.panels.sidebar import render as render_sidebar
from viewer_core.panels.status import render as render_status
from viewer_core.profiles import default_config_path, default_profile_name, resolve_profile
from viewer_core.state import FOCUS_AGENTS, FOCUS_STREAM, ViewerState
from viewer_core.terminal import KeyReader

logger = get_logger("app")

KEY_POLL_SECONDS = 0.1


def _check_project_dir(project_dir: Path) -> None:
    try:
        if not project_dir.is_dir():
            raise StartupError(f"no Claude project directory found at {project_dir}")
        next(project_dir.iterdir(), None)
    except PermissionError as exc:
        raise StartupError(f"cannot read {project_dir}: {exc.strerror or exc}") from exc


def _render(state: ViewerState, width: int, height: int) -> Layout:
    mode = select_layout_mode(width)
    agent = state.current_agent

    layout = Layout()
    layout.split_column(
        Layout(render_header(state.sessions, state.session_index), name="header", size=1),
        Layout(name="body"),
        Layout(
            render_status(agent, len(state.records), state.viewport, state.stream_live, state.profile["name"]),
            name="status",
            size=1,
        ),
    )
    layout["body"].split_row(
        Layout(
            render_sidebar(state.agents, state.agent_index, focused=state.focus == FOCUS_AGENTS),
            name="sidebar",
            size=sidebar_width(mode),
        ),
        Layout(
            render_activity(
                state.lines,
                state.viewport,
                agent,
                live=state.stream_live,
                focused=state.focus == FOCUS_STREAM,
            ),
            name="activity",
        ),
    )
    return layout


def _json_output(controller: ViewerController) -> str:
    state = controller.state
    session = state.current_session
    payload = {
        "profile": controller.profile["name"],
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "project_dir": str(controller.project_dir),
        "selected_session": session.session_id if session else None,
        "sessions": [s.to_dict() for s in state.sessions],
        "agents": [a.to_dict() for a in state.agents],
    }
    return json.dumps(payload, indent=2)


def run_live(console: Console, controller: ViewerController) -> int:
    timers = controller.timers()
    width, height = console.size
    with KeyReader() as keys, Live(console=console, auto_refresh=False, screen=True) as live:
        live.update(_render(controller.state, width, height), refresh=True)
        try:
            while not controller.state.should_quit:
                for key in keys.read_keys(KEY_POLL_SECONDS):
                    controller.events.put(KeyPressed(key))
                if not keys.available:
                    time.sleep(KEY_POLL_SECONDS)

                new_width, new_height = console.size
                if (new_width, new_height) != (width, height):
                    width, height = new_width, new_height
                    controller.events.put(Resized(width, height))

                for timer in timers:
                    fired = timer.poll()
                    if fired is not None:
                        controller.events.put(fired)

                pending = controller.events.drain()
                for event in pending:
                    controller.dispatch(event)
                if pending:
                    live.update(_render(controller.state, width, height), refresh=True)
        except KeyboardInterrupt:
            pass
        finally:
            controller.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Live viewer for Claude subagent transcripts")
    parser.add_argument("--project-dir", help="Working directory whose sessions to show (default: cwd)")
    parser.add_argument("--session", help="Session id to open first")
    parser.add_argument("--profile", default=default_profile_name(), help="View profile: compact|verbose")
    parser.add_argument("--config", default=default_config_path(), help="Optional JSON config file for profile overrides")
    parser.add_argument("--log-file", help="Write diagnostic logs to this file")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file")
    parser.add_argument("--json", action="store_true", help="Emit sessions and agents as JSON and exit")
    parser.add_argument("--snapshot", action="store_true", help="Render a single frame and exit")
    args = parser.parse_args(argv)

    console = Console()
    try:
        configure_logging(args.log_level, args.log_file)
        profile = resolve_profile(args.profile, args.config)
        cwd = Path(args.project_dir).expanduser().resolve() if args.project_dir else Path(os.getcwd())
        project_dir = claude_project_dir(cwd)
        _check_project_dir(project_dir)

        controller = ViewerController(
            project_dir,
            profile,
            watch_factory=None if (args.json or args.snapshot) else start_watch,
            config_path=args.config,
        )
        controller.start(session_id=args.session, height=console.size.height)
        if not controller.state.sessions:
            controller.close()
            raise StartupError(f"no sessions found in {project_dir}")
    except (StartupError, ValueError, OSError) as exc:
        logger.error("startup failed: %s", exc)
        console.print(f"[red]Error:[/red] {exc}")
        return 1

    logger.info("viewing %s", project_dir)
    if args.json:
        print(_json_output(controller))
        return 0

    if args.snapshot:
        width, height = console.size
        console.print(_render(controller.state, width, height), height=height)
        controller.close()
        return 0

    return run_live(console, controller)


if __name__ == "__main__":
    raise SystemExit(main())
