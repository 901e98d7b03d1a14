"""Tests for the Typer CLI surface.

Tests verify that the shelve, unshelve and shelves subcommands:
- Map options onto ShelveOptions
- Print confirmations and listings on stdout
- Report errors once as ``svn: <code>: <message>`` and exit non-zero
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

from shelving.adapters.cli.commands import CommandEnvironment, app
from shelving.adapters.notification.stdout import StdoutNotifier
from shelving.core.commands import ShelveCommands
from shelving.core.models import ClientContext, Depth
from shelving.tests.fakes import FakeDiffStatPort, FakeShelfStorePort

NOW = datetime.fromtimestamp(700, tz=timezone.utc)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def store() -> FakeShelfStorePort:
    return FakeShelfStorePort()


@pytest.fixture
def env(store: FakeShelfStorePort) -> CommandEnvironment:
    commands = ShelveCommands(
        store=store,
        diffstat=FakeDiffStatPort(summary=" 1 file changed\n"),
        clock=lambda: NOW,
        getcwd=lambda: "/wc",
    )
    return CommandEnvironment(commands=commands, context=ClientContext(notify=StdoutNotifier()))


class TestShelveCommand:
    """Test the shelve subcommand."""

    def test_shelve_paths(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        result = runner.invoke(app, ["shelve", "myfix", "a.c"], obj=env)

        assert result.exit_code == 0, result.output
        assert "Shelved '/wc/a.c'" in result.output
        assert result.output.endswith("shelved 'myfix'\n")
        assert store.create_calls[0]["targets"] == ["/wc/a.c"]

    def test_options_are_mapped(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        result = runner.invoke(
            app,
            [
                "shelve",
                "--depth", "files",
                "--cl", "c1",
                "--changelist", "c2",
                "--keep-local",
                "--dry-run",
                "-m", "wip",
                "myfix", "a.c",
            ],
            obj=env,
        )

        assert result.exit_code == 0, result.output
        call = store.create_calls[0]
        assert call["depth"] is Depth.FILES
        assert call["changelists"] == ["c1", "c2"]
        assert call["keep_local"] is True
        assert call["dry_run"] is True
        assert store.log_messages_seen == ["wip"]

    def test_quiet_prints_nothing(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        result = runner.invoke(app, ["shelve", "-q", "myfix", "a.c"], obj=env)

        assert result.exit_code == 0
        assert result.output == ""
        assert "myfix.patch" in store.shelves

    def test_no_targets_fails(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        result = runner.invoke(app, ["shelve", "myfix"], obj=env)

        assert result.exit_code == 1
        assert "svn: E205001: Not enough arguments provided" in result.output
        assert store.call_count == 0

    def test_list_with_arguments_fails(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        result = runner.invoke(app, ["shelve", "--list", "extra"], obj=env)

        assert result.exit_code == 1
        assert "svn: E205000: Try 'svn help shelve' for more information" in result.output
        assert store.list_calls == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_is_reported(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort, name: str
    ) -> None:
        result = runner.invoke(app, ["shelve", name, "a.c"], obj=env)

        assert result.exit_code == 1
        assert "svn: E205000: Shelf name must not be empty" in result.output
        assert "shelved" not in result.output
        assert store.call_count == 0

    def test_remove(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.add_shelf("old", mtime=1)

        result = runner.invoke(app, ["shelve", "--remove", "old"], obj=env)

        assert result.exit_code == 0, result.output
        assert "deleted 'old'" in result.output
        assert store.shelves == {}

    def test_message_and_file_are_exclusive(
        self, runner: CliRunner, env: CommandEnvironment, tmp_path: Path
    ) -> None:
        message_file = tmp_path / "msg.txt"
        message_file.write_text("from file")

        result = runner.invoke(
            app, ["shelve", "-m", "inline", "-F", str(message_file), "fix", "a.c"], obj=env
        )

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_message_file_is_read(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort, tmp_path: Path
    ) -> None:
        message_file = tmp_path / "msg.txt"
        message_file.write_text("from file")

        result = runner.invoke(app, ["shelve", "-F", str(message_file), "fix", "a.c"], obj=env)

        assert result.exit_code == 0, result.output
        assert store.log_messages_seen == ["from file"]

    def test_non_utf8_message_file_fails(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort, tmp_path: Path
    ) -> None:
        message_file = tmp_path / "msg.txt"
        message_file.write_bytes(b"\xff\xfe")

        result = runner.invoke(app, ["shelve", "-F", str(message_file), "fix", "a.c"], obj=env)

        assert result.exit_code == 1
        assert "svn: E000022:" in result.output
        assert store.call_count == 0

    def test_targets_file(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort, tmp_path: Path
    ) -> None:
        targets = tmp_path / "targets.txt"
        targets.write_text("a.c\n\nsrc/b.c\n")

        result = runner.invoke(app, ["shelve", "--targets", str(targets), "fix"], obj=env)

        assert result.exit_code == 0, result.output
        assert store.create_calls[0]["targets"] == ["/wc/a.c", "/wc/src/b.c"]

    def test_store_error_is_reported(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.set_should_fail(True, "Shelved change 'fix' already exists")

        result = runner.invoke(app, ["shelve", "fix", "a.c"], obj=env)

        assert result.exit_code == 1
        assert "svn: E200000: Shelved change 'fix' already exists" in result.output
        assert "shelved 'fix'" not in result.output


class TestUnshelveCommand:
    """Test the unshelve subcommand."""

    def test_youngest_by_default(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.add_shelf("x", mtime=1)

        result = runner.invoke(app, ["unshelve"], obj=env)

        assert result.exit_code == 0, result.output
        assert "unshelving the youngest change, 'x'" in result.output
        assert "unshelved 'x'" in result.output
        assert store.apply_calls == [("x", "/wc", False, False)]

    def test_no_shelves(self, runner: CliRunner, env: CommandEnvironment) -> None:
        result = runner.invoke(app, ["unshelve"], obj=env)

        assert result.exit_code == 1
        assert "svn: E205001: No shelved changes found" in result.output

    def test_trailing_argument_fails(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.add_shelf("x", mtime=1)

        result = runner.invoke(app, ["unshelve", "x", "y"], obj=env)

        assert result.exit_code == 1
        assert "Try 'svn help unshelve'" in result.output
        assert store.apply_calls == []

    def test_flags_are_forwarded(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.add_shelf("x", mtime=1)

        result = runner.invoke(app, ["unshelve", "--keep-local", "--dry-run", "-q", "x"], obj=env)

        assert result.exit_code == 0
        assert result.output == ""
        assert store.apply_calls == [("x", "/wc", True, True)]


class TestShelvesCommand:
    """Test the shelves subcommand."""

    def test_lists_with_diffstat(
        self, runner: CliRunner, env: CommandEnvironment, store: FakeShelfStorePort
    ) -> None:
        store.add_shelf("x", mtime=100, size_bytes=7, message="note")

        result = runner.invoke(app, ["shelves"], obj=env)

        assert result.exit_code == 0, result.output
        assert result.output == (
            f"{'x':<30}     10 mins old          7 bytes\n"
            " note\n"
            " 1 file changed\n"
            "\n"
        )

    def test_help_says_names_drop_the_suffix(self, runner: CliRunner, env: CommandEnvironment) -> None:
        result = runner.invoke(app, ["shelves", "--help"], obj=env)

        assert result.exit_code == 0
        assert ".patch" in result.output
        assert "suffix" in result.output

    def test_arguments_rejected(self, runner: CliRunner, env: CommandEnvironment) -> None:
        result = runner.invoke(app, ["shelves", "extra"], obj=env)

        assert result.exit_code == 1
        assert "Try 'svn help shelves'" in result.output


def test_missing_environment_is_a_programming_error(runner: CliRunner) -> None:
    result = runner.invoke(app, ["shelves"])

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
