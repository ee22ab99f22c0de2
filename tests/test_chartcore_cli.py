from __future__ import annotations

import importlib.util
import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

MODULE_PATH = Path(__file__).resolve().parents[1] / "main.py"
SPEC = importlib.util.spec_from_file_location("chartcore_cli_main", MODULE_PATH)
if SPEC is None or SPEC.loader is None:
    raise RuntimeError(f"failed to load module spec for {MODULE_PATH}")
MODULE = importlib.util.module_from_spec(SPEC)
sys.modules[SPEC.name] = MODULE
SPEC.loader.exec_module(MODULE)


class FrameCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        root = Path(self._tmp.name)
        self.config_path = root / "chart.json"
        self.config_path.write_text(
            json.dumps({"width": 400, "height": 300, "zoomXStep": 1, "zoomYStep": 1}), encoding="utf-8"
        )
        self.data_path = root / "data.json"
        self.data_path.write_text(json.dumps([[1, 2], [2, 4], [3, 1]]), encoding="utf-8")

    def _run(self, *extra: str) -> dict:
        argv = ["chartcore", "frame", str(self.config_path), str(self.data_path), *extra]
        out = io.StringIO()
        with mock.patch.object(sys, "argv", argv), redirect_stdout(out):
            MODULE.main()
        return json.loads(out.getvalue())

    def test_selection_is_aggregated(self) -> None:
        payload = self._run("--measure", "none", "--select", "260,20,280,40")
        self.assertEqual(payload["metadata"]["active_indices"], [1])
        self.assertEqual(payload["aggregate"], {"min": 4.0, "max": 4.0, "sum": 4.0, "avg": 4.0, "diff": None})
        self.assertEqual(payload["value_info"]["lines"], ["x: 2", "y: 4"])
        self.assertEqual(len(payload["items"]), 3)

    def test_wheel_replay_zooms(self) -> None:
        payload = self._run("--measure", "none", "--wheel", "270,30,-1")
        self.assertAlmostEqual(payload["metadata"]["x_max"], 2.65)
        self.assertEqual(payload["generation"], 2)
        self.assertIsNone(payload["aggregate"])

    def test_malformed_wheel_exits(self) -> None:
        with self.assertRaises(SystemExit):
            with redirect_stdout(io.StringIO()), mock.patch.object(sys, "stderr", io.StringIO()):
                self._run("--wheel", "1,2")

    def test_invalid_config_exits_with_error(self) -> None:
        self.config_path.write_text(json.dumps({"width": 400}), encoding="utf-8")
        with self.assertLogs("chartcore.cli", level="ERROR") as logs:
            with self.assertRaises(SystemExit) as ctx:
                self._run()
        self.assertEqual(ctx.exception.code, 1)
        self.assertTrue(any("width and height are required" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
