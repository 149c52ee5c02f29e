from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from support import write_agent  # noqa: E402
from viewer_core.app import main  # noqa: E402
from viewer_core.collectors.sessions import claude_project_dir, subagents_dir  # noqa: E402


class AppTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name) / "claude"
        self.cwd = Path(self._tmp.name) / "work" / "project"
        self.cwd.mkdir(parents=True)
        self._previous_home = os.environ.get("CLAUDE_HOME")
        os.environ["CLAUDE_HOME"] = str(self.home)

    def tearDown(self):
        if self._previous_home is None:
            os.environ.pop("CLAUDE_HOME", None)
        else:
            os.environ["CLAUDE_HOME"] = self._previous_home
        self._tmp.cleanup()

    def run_main(self, *args: str) -> tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["--project-dir", str(self.cwd), *args])
        return code, out.getvalue()

    def test_missing_project_dir_exits_nonzero(self):
        code, output = self.run_main("--json")
        self.assertEqual(code, 1)
        self.assertIn("no Claude project directory", output)

    def test_no_sessions_exits_nonzero(self):
        claude_project_dir(self.cwd.resolve()).mkdir(parents=True)
        code, output = self.run_main("--json")
        self.assertEqual(code, 1)
        self.assertIn("no sessions found", output)

    def test_bad_profile_exits_nonzero(self):
        code, output = self.run_main("--profile", "fancy")
        self.assertEqual(code, 1)
        self.assertIn("unknown profile", output)

    def test_json_lists_sessions_and_agents(self):
        project = claude_project_dir(self.cwd.resolve())
        write_agent(subagents_dir(project, "aaaa-1111"), "a1", "2026-01-01T10:00:00Z")
        write_agent(subagents_dir(project, "aaaa-1111"), "a2", "2026-01-01T10:00:01Z")
        code, output = self.run_main("--json")
        self.assertEqual(code, 0)
        payload = json.loads(output)
        self.assertEqual(payload["selected_session"], "aaaa-1111")
        self.assertEqual([a["agent_id"] for a in payload["agents"]], ["a1", "a2"])
        self.assertEqual(payload["profile"], "compact")

    def test_snapshot_renders_once(self):
        project = claude_project_dir(self.cwd.resolve())
        write_agent(subagents_dir(project, "aaaa-1111"), "a1", "2026-01-01T10:00:00Z", lines=3)
        code, output = self.run_main("--snapshot")
        self.assertEqual(code, 0)
        self.assertIn("Subagent Viewer", output)
        self.assertIn("task-a1", output)


if __name__ == "__main__":
    unittest.main()
