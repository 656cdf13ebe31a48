import io
import os
import stat
import tempfile
import unittest
from unittest.mock import patch

import runner
from command import Redirect, SimpleCommand, Word
from exceptions import SpawnError
from shell_state import ShellState


def simple(verb, *params, **redirects):
    return SimpleCommand(Word(verb), [Word(p) for p in params], **redirects)


class TestRunner(unittest.TestCase):
    def setUp(self):
        self.state = ShellState(environ={"PATH": os.environ.get("PATH", "/usr/bin:/bin")})
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.cwd = os.getcwd()
        os.chdir(self.tmpdir.name)
        self.addCleanup(lambda: os.chdir(self.cwd))

    # Helpers
    def read_file(self, name: str) -> str:
        with open(os.path.join(self.tmpdir.name, name), "r", encoding="utf-8") as f:
            return f.read()

    def write_file(self, name: str, content: str) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    # Builtins
    def test_builtin_runs_in_process(self):
        with patch.object(runner, "run_builtin", return_value=5) as mock_builtin, \
             patch.object(runner, "execute_external") as mock_external:
            rc = runner.execute_command(simple("foo"), self.state)

        self.assertEqual(5, rc)
        mock_builtin.assert_called_once()
        mock_external.assert_not_called()

    def test_non_builtin_runs_external(self):
        with patch.object(runner, "execute_external", return_value=7) as mock_external:
            rc = runner.execute_command(simple("ext", "a"), self.state)

        self.assertEqual(7, rc)
        mock_external.assert_called_once()

    # External commands
    def test_external_exit_status_is_returned(self):
        for code in (0, 1, 5, 255):
            with self.subTest(code=code):
                rc = runner.execute_external(simple("sh", "-c", f"exit {code}"), self.state)
                self.assertEqual(code, rc)

    def test_external_stdout_redirect(self):
        cmd = simple("printf", "hello\\n", stdout=Redirect(Word("out.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(0, rc)
        self.assertEqual("hello\n", self.read_file("out.txt"))

    def test_external_stdin_redirect(self):
        self.write_file("in.txt", "abc\n")
        cmd = simple("cat", stdin=Redirect(Word("in.txt")), stdout=Redirect(Word("out.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(0, rc)
        self.assertEqual("abc\n", self.read_file("out.txt"))

    def test_external_append_keeps_existing_content(self):
        self.write_file("out.txt", "first\n")
        cmd = simple("printf", "second\\n", stdout=Redirect(Word("out.txt"), append=True))
        runner.execute_external(cmd, self.state)
        self.assertEqual("first\nsecond\n", self.read_file("out.txt"))

    def test_external_redirect_does_not_touch_parent_streams(self):
        before = os.fstat(1)
        runner.execute_external(simple("true", stdout=Redirect(Word("out.txt"))), self.state)
        after = os.fstat(1)
        self.assertEqual((before.st_dev, before.st_ino), (after.st_dev, after.st_ino))

    def test_missing_input_fails_only_the_command(self):
        cmd = simple("cat", stdin=Redirect(Word("missing.txt")), stderr=Redirect(Word("err.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertNotEqual(0, rc)

    def test_child_sees_context_environment(self):
        self.state.set_var("PYSH_GREETING", "value")
        cmd = simple("printenv", "PYSH_GREETING", stdout=Redirect(Word("out.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(0, rc)
        self.assertEqual("value\n", self.read_file("out.txt"))

    def test_command_not_found_returns_127(self):
        cmd = simple("pysh-no-such-program", stderr=Redirect(Word("err.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(127, rc)
        self.assertIn("pysh-no-such-program: command not found", self.read_file("err.txt"))

    def test_verb_expanding_to_nothing_returns_127(self):
        cmd = simple("$PYSH_UNSET_VERB", stderr=Redirect(Word("err.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(127, rc)
        self.assertIn("$PYSH_UNSET_VERB: command not found", self.read_file("err.txt"))

    def test_not_executable_returns_126(self):
        path = self.write_file("script.sh", "#!/bin/sh\nexit 0\n")
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
        cmd = simple("./script.sh", stderr=Redirect(Word("err.txt")))
        rc = runner.execute_external(cmd, self.state)
        self.assertEqual(126, rc)

    def test_killed_program_is_a_failure(self):
        rc = runner.execute_external(simple("sh", "-c", "kill -9 $$"), self.state)
        # $$ is not a shell variable name, so it reaches sh untouched
        self.assertEqual(137, rc)

    def test_fork_failure_returns_failure(self):
        buf = io.StringIO()
        with patch.object(runner, "spawn", side_effect=SpawnError("fork failed")), \
             patch("sys.stderr", buf):
            rc = runner.execute_external(simple("true"), self.state)
        self.assertEqual(1, rc)
        self.assertIn("fork failed", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
