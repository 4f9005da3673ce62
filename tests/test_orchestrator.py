"""
Orchestrator + pipeline: skip/build decisions, idempotent reruns, dry run, best-effort failures.
Encoders are replaced by a runner that touches the output file instead of running ffmpeg.
"""
import io
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from colorloops.orchestrator import BuildOrchestrator
from colorloops.pipeline import generate_matrix
from colorloops.runner import CommandRunner
from colorloops.schema import Color, Outcome, Resolution

RED = Color("red", "#FF0000")
BLUE = Color("blue", "#0000FF")
PALETTE = (RED, BLUE)
HD = Resolution(1920, 1080)

EXPECTED = [
    "1920x1080-red.jpg",
    "1920x1080-red.mov",
    "1920x1080-red-to-blue.mov",
    "1920x1080-blue.jpg",
    "1920x1080-blue.mov",
    "1920x1080-blue-to-red.mov",
]


class TouchingRunner(CommandRunner):
    """Live-mode runner that records commands and creates the output instead of encoding."""

    def __init__(self, fail_on: tuple[str, ...] = ()):
        super().__init__(dry_run=False)
        self.commands = []
        self.fail_on = fail_on

    def run(self, command):
        self.commands.append(command)
        output = Path(command.argv[-1])
        if output.name in self.fail_on:
            return False
        output.touch()
        return True

    @property
    def outputs(self) -> list[str]:
        return [Path(c.argv[-1]).name for c in self.commands]


class TestBuildOrchestrator(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, runner, palette=PALETTE, resolutions=(HD,)):
        return generate_matrix(palette, resolutions, self.out, orchestrator=BuildOrchestrator(runner))

    def test_fresh_run_builds_six_artifacts(self):
        runner = TouchingRunner()
        results = self._run(runner)
        self.assertEqual(len(runner.commands), 6)
        self.assertEqual(sorted(runner.outputs), sorted(EXPECTED))
        self.assertTrue(all(r.outcome is Outcome.BUILT for r in results))
        for name in EXPECTED:
            self.assertTrue((self.out / "1920x1080" / name).exists(), name)
        # image before video before transition for each color
        for color in ("red", "blue"):
            own = [n for n in runner.outputs if n.startswith(f"1920x1080-{color}")]
            self.assertEqual(own, [n for n in EXPECTED if n.startswith(f"1920x1080-{color}")])

    def test_transition_waits_for_next_image(self):
        runner = TouchingRunner()
        self._run(runner)
        self.assertLess(runner.outputs.index("1920x1080-blue.jpg"), runner.outputs.index("1920x1080-red-to-blue.mov"))

    def test_second_run_issues_no_commands(self):
        self._run(TouchingRunner())
        again = TouchingRunner()
        results = self._run(again)
        self.assertEqual(again.commands, [])
        self.assertEqual(len(results), 6)
        self.assertTrue(all(r.outcome is Outcome.SKIPPED for r in results))

    def test_existing_image_is_skipped_but_still_referenced(self):
        res_dir = self.out / "1920x1080"
        res_dir.mkdir()
        red_jpg = res_dir / "1920x1080-red.jpg"
        red_jpg.touch()
        runner = TouchingRunner()
        self._run(runner)
        self.assertNotIn("1920x1080-red.jpg", runner.outputs)
        self.assertEqual(len(runner.commands), 5)
        by_output = {Path(c.argv[-1]).name: c for c in runner.commands}
        self.assertIn(str(red_jpg), by_output["1920x1080-red.mov"].argv)
        self.assertIn(str(red_jpg), by_output["1920x1080-red-to-blue.mov"].argv)

    def test_skip_ignores_contents(self):
        res_dir = self.out / "1920x1080"
        res_dir.mkdir()
        (res_dir / "1920x1080-blue.mov").write_bytes(b"")
        runner = TouchingRunner()
        with self.assertLogs("colorloops.orchestrator", level="DEBUG") as logs:
            self._run(runner)
        self.assertNotIn("1920x1080-blue.mov", runner.outputs)
        self.assertTrue(any("because it already exists" in line for line in logs.output))

    def test_empty_palette_is_noop(self):
        runner = TouchingRunner()
        results = self._run(runner, palette=())
        self.assertEqual(results, [])
        self.assertEqual(runner.commands, [])
        self.assertEqual(list(self.out.iterdir()), [])

    @mock.patch("colorloops.runner.subprocess.run")
    def test_dry_run_creates_nothing_and_lists_same_commands(self, run):
        stream = io.StringIO()
        dry = self._run(CommandRunner(dry_run=True, stream=stream))
        run.assert_not_called()
        self.assertEqual(list(self.out.iterdir()), [])
        lines = stream.getvalue().splitlines()
        self.assertEqual(len(lines), 6)
        self.assertTrue(all(line.startswith("DRY RUN: ") for line in lines))
        self.assertTrue(all(r.outcome is Outcome.PLANNED for r in dry))
        self.assertEqual([r.artifact.path.name for r in dry], EXPECTED)

        live = self._run(TouchingRunner())
        self.assertEqual({r.command for r in dry}, {r.command for r in live})
        self.assertEqual(sorted(lines), sorted(f"DRY RUN: {r.command}" for r in live))

    def test_failed_image_blocks_dependents_and_continues(self):
        runner = TouchingRunner(fail_on=("1920x1080-red.jpg",))
        with self.assertLogs("colorloops.orchestrator", level="WARNING"):
            results = self._run(runner)
        self.assertEqual(runner.outputs, ["1920x1080-red.jpg", "1920x1080-blue.jpg", "1920x1080-blue.mov"])
        outcomes = {r.artifact.path.name: r.outcome for r in results}
        self.assertEqual(outcomes["1920x1080-red.jpg"], Outcome.FAILED)
        self.assertEqual(outcomes["1920x1080-blue.jpg"], Outcome.BUILT)
        self.assertEqual(outcomes["1920x1080-blue.mov"], Outcome.BUILT)
        for name in ("1920x1080-red.mov", "1920x1080-red-to-blue.mov", "1920x1080-blue-to-red.mov"):
            self.assertEqual(outcomes[name], Outcome.BLOCKED)
        self.assertEqual(len(results), 6)

    def test_failed_video_does_not_stop_batch(self):
        runner = TouchingRunner(fail_on=("1920x1080-red.mov",))
        results = self._run(runner)
        self.assertEqual(len(runner.commands), 6)
        failed = [r.artifact.path.name for r in results if r.outcome is Outcome.FAILED]
        self.assertEqual(failed, ["1920x1080-red.mov"])

    def test_unwritable_output_dir_fails_each_artifact_without_raising(self):
        not_a_dir = self.out / "afile"
        not_a_dir.write_text("", encoding="utf-8")
        runner = TouchingRunner()
        orchestrator = BuildOrchestrator(runner)
        with self.assertLogs("colorloops.orchestrator", level="WARNING") as logs:
            results = generate_matrix((RED,), (Resolution(64, 32), Resolution(32, 16)), not_a_dir, orchestrator=orchestrator)
        self.assertEqual(len(results), 6)
        self.assertEqual(runner.commands, [])
        outcomes = [(r.artifact.path.name, r.outcome) for r in results]
        self.assertEqual(outcomes, [
            ("64x32-red.jpg", Outcome.FAILED),
            ("64x32-red.mov", Outcome.BLOCKED),
            ("64x32-red-to-red.mov", Outcome.BLOCKED),
            ("32x16-red.jpg", Outcome.FAILED),
            ("32x16-red.mov", Outcome.BLOCKED),
            ("32x16-red-to-red.mov", Outcome.BLOCKED),
        ])
        self.assertTrue(any("cannot create" in line for line in logs.output))

    def test_resolutions_in_order(self):
        runner = TouchingRunner()
        self._run(runner, palette=(RED,), resolutions=(HD, Resolution(1280, 720)))
        self.assertEqual(runner.outputs, [
            "1920x1080-red.jpg", "1920x1080-red.mov", "1920x1080-red-to-red.mov",
            "1280x720-red.jpg", "1280x720-red.mov", "1280x720-red-to-red.mov",
        ])
        self.assertTrue((self.out / "1280x720").is_dir())

    def test_creating_lines_logged(self):
        with self.assertLogs("colorloops.orchestrator", level="INFO") as logs:
            self._run(TouchingRunner(), palette=(RED,))
        self.assertIn("INFO:colorloops.orchestrator:creating red image with resolution of 1920x1080", logs.output)


if __name__ == "__main__":
    unittest.main()
