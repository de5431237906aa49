import subprocess
import unittest
from unittest import mock

from gopher.core import process


class RunCommandTests(unittest.TestCase):
    def test_success_captures_output(self):
        completed = subprocess.CompletedProcess(["ls"], 0, stdout="a\n", stderr="")
        with mock.patch.object(process.subprocess, "run", return_value=completed) as run:
            result = process.run_command(["ls"], cwd="/tmp")
        self.assertEqual(result, process.ExecResult(True, "Success"))
        kwargs = run.call_args.kwargs
        self.assertEqual(kwargs["cwd"], "/tmp")
        self.assertTrue(kwargs["capture_output"])
        self.assertIs(kwargs["stdin"], subprocess.DEVNULL)
        self.assertFalse(kwargs["check"])

    def test_failure_uses_last_stderr_line(self):
        completed = subprocess.CompletedProcess(["cp"], 1, stdout="", stderr="warning\ncp: cannot stat 'x'\n\n")
        with mock.patch.object(process.subprocess, "run", return_value=completed):
            result = process.run_command(["cp", "x", "y"])
        self.assertFalse(result.ok)
        self.assertEqual(result.message, "cp: cannot stat 'x'")

    def test_failure_without_stderr_reports_status(self):
        completed = subprocess.CompletedProcess(["false"], 3, stdout="", stderr="")
        with mock.patch.object(process.subprocess, "run", return_value=completed):
            result = process.run_command(["false"])
        self.assertEqual(result.message, "false: exit status 3")

    def test_interactive_inherits_terminal(self):
        completed = subprocess.CompletedProcess(["bash"], 0)
        with mock.patch.object(process.subprocess, "run", return_value=completed) as run:
            result = process.run_command(["bash"], cwd="/d", interactive=True)
        self.assertTrue(result.ok)
        run.assert_called_once_with(["bash"], cwd="/d", check=False)

    def test_spawn_failure(self):
        error = FileNotFoundError(2, "No such file or directory")
        with mock.patch.object(process.subprocess, "run", side_effect=error):
            result = process.run_command(["nope"])
        self.assertEqual(result, process.ExecResult(False, "No such file or directory"))

    def test_empty_argv(self):
        self.assertFalse(process.run_command([]).ok)


if __name__ == "__main__":
    unittest.main()
