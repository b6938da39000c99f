"""Tests for executor module."""

import unittest
from pathlib import Path

from helpers.logging import RecordingLogger, logger_stub
from helpers.process_runner import MockProcessRunner
from taskchain.config import Settings
from taskchain.executor import ExecutionError, Executor, split_quiet_prefix
from taskchain.graph import CycleError
from taskchain.logging import LogLevel
from taskchain.parser import builtin_registry
from taskchain.registry import Recipe, RecipeNotFoundError, Registry

SH = Settings(shell="sh", args=["-cu"])


class TestSplitQuietPrefix(unittest.TestCase):
    def test_plain_line(self):
        self.assertEqual(split_quiet_prefix("make all"), (False, "make all"))

    def test_quiet_line(self):
        self.assertEqual(split_quiet_prefix("@ just -l"), (True, "just -l"))
        self.assertEqual(split_quiet_prefix("@echo hi"), (True, "echo hi"))


class TestExecutor(unittest.TestCase):
    def setUp(self):
        self.project_root = Path("/project")
        self.registry = builtin_registry(self.project_root)

    def test_install_runs_chain_in_order(self):
        """Test every recipe in the chain is dispatched once, dependencies first."""
        runner = MockProcessRunner()
        executor = Executor(self.registry, logger_stub, runner, SH)

        order = executor.execute_recipe("install")

        self.assertEqual(
            [recipe.name for recipe in order], ["build-release", "test-release", "install"]
        )
        self.assertEqual(
            runner.commands,
            [
                "cargo build --release",
                "cargo test --release",
                "cp -vf ./target/release/tmux-sessionizer ~/.config/tmux-sessionizer",
            ],
        )

    def test_commands_run_through_shell_in_project_root(self):
        """Test each line is one process: shell, shell args, line, cwd=project root."""
        runner = MockProcessRunner()
        executor = Executor(self.registry, logger_stub, runner, SH)

        executor.execute_recipe("clean-release")

        ((cmd, kwargs),) = runner.calls
        self.assertEqual(cmd, ["sh", "-cu", "cargo clean -r"])
        self.assertEqual(kwargs["cwd"], self.project_root)
        self.assertFalse(kwargs["check"])
        self.assertNotIn("env", kwargs)

    def test_failure_aborts_chain(self):
        """Test a failing build stops test and install from running."""
        runner = MockProcessRunner(exit_codes={"cargo build": 101})
        executor = Executor(self.registry, logger_stub, runner, SH)

        with self.assertRaises(ExecutionError) as cm:
            executor.execute_recipe("install")

        self.assertEqual(runner.commands, ["cargo build --release"])
        self.assertEqual(cm.exception.recipe_name, "build-release")
        self.assertEqual(cm.exception.exit_code, 101)
        self.assertEqual(cm.exception.command, "cargo build --release")

    def test_failure_midway_keeps_earlier_work(self):
        """Test a failure in the middle leaves earlier commands run and later ones not."""
        runner = MockProcessRunner(exit_codes={"cargo test": 2})
        executor = Executor(self.registry, logger_stub, runner, SH)

        with self.assertRaises(ExecutionError) as cm:
            executor.execute_recipe("install")

        self.assertEqual(runner.commands, ["cargo build --release", "cargo test --release"])
        self.assertEqual(cm.exception.recipe_name, "test-release")

    def test_failure_stops_remaining_lines_of_recipe(self):
        """Test later lines of the failing recipe don't run."""
        registry = Registry(
            [Recipe(name="multi", cmds=("first", "second", "third"))], Path(".")
        )
        runner = MockProcessRunner(exit_codes={"second": 1})
        executor = Executor(registry, logger_stub, runner, SH)

        with self.assertRaises(ExecutionError):
            executor.execute_recipe("multi")

        self.assertEqual(runner.commands, ["first", "second"])

    def test_signal_exit_code(self):
        """Test a child killed by a signal is reported as 128 + signal."""
        runner = MockProcessRunner(default_exit_code=-15)
        executor = Executor(self.registry, logger_stub, runner, SH)

        with self.assertRaises(ExecutionError) as cm:
            executor.execute_recipe("br")

        self.assertEqual(cm.exception.exit_code, 143)

    def test_unknown_target_runs_nothing(self):
        """Test an unknown target fails before anything is dispatched."""
        runner = MockProcessRunner()
        executor = Executor(self.registry, logger_stub, runner, SH)

        with self.assertRaises(RecipeNotFoundError):
            executor.execute_recipe("does-not-exist")

        self.assertEqual(runner.calls, [])

    def test_cycle_runs_nothing(self):
        """Test a cycle fails before anything is dispatched."""
        registry = Registry(
            [
                Recipe(name="ok", cmds=("echo ok",)),
                Recipe(name="a", cmds=("echo a",), deps=("ok", "b")),
                Recipe(name="b", cmds=("echo b",), deps=("a",)),
            ],
            Path("."),
        )
        runner = MockProcessRunner()
        executor = Executor(registry, logger_stub, runner, SH)

        with self.assertRaises(CycleError):
            executor.execute_recipe("a")

        self.assertEqual(runner.calls, [])

    def test_diamond_runs_shared_dependency_once(self):
        """Test a shared dependency is dispatched a single time."""
        registry = Registry(
            [
                Recipe(name="setup", cmds=("setup",)),
                Recipe(name="build", cmds=("build",), deps=("setup",)),
                Recipe(name="test", cmds=("test",), deps=("setup",)),
                Recipe(name="deploy", cmds=("deploy",), deps=("build", "test")),
            ],
            Path("."),
        )
        runner = MockProcessRunner()
        Executor(registry, logger_stub, runner, SH).execute_recipe("deploy")

        self.assertEqual(runner.commands, ["setup", "build", "test", "deploy"])

    def test_quiet_prefix_is_stripped_and_not_echoed(self):
        """Test '@' lines run without the prefix and without being echoed."""
        registry = Registry(
            [Recipe(name="r", cmds=("@echo quiet", "echo loud"))], Path(".")
        )
        runner = MockProcessRunner()
        logger = RecordingLogger()
        Executor(registry, logger, runner, SH).execute_recipe("r")

        self.assertEqual(runner.commands, ["echo quiet", "echo loud"])
        echoed = logger.messages(LogLevel.INFO)
        self.assertEqual(echoed, ["[bold]echo loud[/bold]"])

    def test_dry_run_dispatches_nothing(self):
        """Test dry run echoes every line, quiet ones included, and runs none."""
        runner = MockProcessRunner()
        logger = RecordingLogger()
        executor = Executor(self.registry, logger, runner, SH)

        executor.execute_recipe("install", dry_run=True)
        executor.execute_recipe("list", dry_run=True)

        self.assertEqual(runner.calls, [])
        echoed = logger.messages(LogLevel.INFO)
        self.assertEqual(len(echoed), 4)
        self.assertIn("cargo build --release", echoed[0])
        self.assertIn("-m taskchain --list", echoed[3])

    def test_echo_escapes_markup(self):
        """Test square brackets in commands are not treated as rich markup."""
        registry = Registry([Recipe(name="r", cmds=("echo [red]hi",))], Path("."))
        runner = MockProcessRunner()
        logger = RecordingLogger()
        Executor(registry, logger, runner, SH).execute_recipe("r")

        self.assertEqual(logger.messages(LogLevel.INFO), ["[bold]echo \\[red]hi[/bold]"])
        self.assertEqual(runner.commands, ["echo [red]hi"])

    def test_default_settings_are_platform_shell(self):
        """Test the executor falls back to the platform shell."""
        executor = Executor(self.registry, logger_stub, MockProcessRunner())
        self.assertIn(executor.settings.shell, ("sh", "cmd"))


if __name__ == "__main__":
    unittest.main()
