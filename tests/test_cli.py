"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from minigit.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, root, *args, **kwargs):
    return runner.invoke(cli, ["--root", str(root), *args], obj={}, **kwargs)


def last_hash(output):
    return output.strip().rsplit("Hash: ", 1)[1]


class TestCliCommands:
    def test_init(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "init")
        assert result.exit_code == 0
        assert "Initialized empty minigit repository" in result.output
        result = invoke(runner, tmp_path, "init")
        assert "already exists" in result.output

    def test_not_initialized(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "log")
        assert result.exit_code == 1
        assert "Not a minigit repository" in result.output

    def test_add_missing_file(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        result = invoke(runner, tmp_path, "add", "nope.txt")
        assert result.exit_code == 1
        assert "File 'nope.txt' not found." in result.output

    def test_commit_nothing_staged(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        result = invoke(runner, tmp_path, "commit", "-m", "empty")
        assert result.exit_code == 1
        assert "No files staged" in result.output

    def test_commit_requires_message(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        result = invoke(runner, tmp_path, "commit")
        assert result.exit_code == 2

    def test_log_empty(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        result = invoke(runner, tmp_path, "log")
        assert "No commits yet" in result.output

    def test_full_workflow(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        (tmp_path / "a.txt").write_text("hello\n")
        assert invoke(runner, tmp_path, "add", "a.txt").exit_code == 0
        c1 = last_hash(invoke(runner, tmp_path, "commit", "-m", "c1").output)
        result = invoke(runner, tmp_path, "branch", "b1")
        assert f"Branch 'b1' created at commit {c1}." in result.output

        (tmp_path / "a.txt").write_text("world\n")
        invoke(runner, tmp_path, "add", "a.txt")
        c2 = last_hash(invoke(runner, tmp_path, "commit", "-m", "c2").output)

        log = invoke(runner, tmp_path, "log").output
        assert log.index(f"Commit {c2}:") < log.index(f"Commit {c1}:")
        assert "message: c2" in log

        diff = invoke(runner, tmp_path, "diff", c1, c2).output
        assert diff == "File: a.txt\n- hello\n+ world\n"

        result = invoke(runner, tmp_path, "merge", "b1")
        assert "Merging branch 'b1'..." in result.output
        assert (tmp_path / "a.txt").read_text() == "hello\n"

        result = invoke(runner, tmp_path, "branches")
        assert "b1" in result.output

        result = invoke(runner, tmp_path, "checkout", "b1")
        assert "Checked out branch 'b1'." in result.output
        result = invoke(runner, tmp_path, "branches")
        assert "* b1" in result.output

    def test_checkout_missing_branch(self, runner, tmp_path):
        invoke(runner, tmp_path, "init")
        result = invoke(runner, tmp_path, "checkout", "nope")
        assert result.exit_code == 1
        assert "Branch 'nope' does not exist." in result.output

    def test_repo_dir_from_env(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "init", env={"MINIGIT_DIR": ".alt"})
        assert result.exit_code == 0
        assert (tmp_path / ".alt").is_dir()


class TestCliShell:
    def test_session(self, runner, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        script = "\n".join([
            "log",
            "init",
            "add a.txt",
            "commit -m first commit",
            "commit -m nothing",
            "branch",
            "bogus",
            "log",
            "exit",
            "log",
        ]) + "\n"
        result = invoke(runner, tmp_path, "shell", input=script)
        assert result.exit_code == 0
        out = result.output
        assert "MiniGit started." in out
        assert "Not a minigit repository" in out
        assert "Added 'a.txt' to staging area." in out
        assert "Committed successfully." in out
        assert "No files staged. Commit aborted." in out
        assert "Usage: branch <name>" in out
        assert "Unknown command." in out
        assert out.count("message: first commit") == 1

    def test_eof_ends_session(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "shell", input="init\n")
        assert result.exit_code == 0

    def test_diff_usage(self, runner, tmp_path):
        result = invoke(runner, tmp_path, "shell", input="init\ndiff onlyone\nexit\n")
        assert "Usage: diff <commitA> <commitB>" in result.output

    def test_unwritable_file_does_not_end_session(self, runner, tmp_path):
        (tmp_path / "a.txt").write_text("hello")
        script = "init\nadd a.txt\ncommit -m first\nbranch b1\n"
        invoke(runner, tmp_path, "shell", input=script)
        (tmp_path / "a.txt").unlink()
        (tmp_path / "a.txt").mkdir()

        result = invoke(runner, tmp_path, "shell", input="checkout b1\nlog\nexit\n")
        assert result.exit_code == 0
        assert result.exception is None
        assert "File 'a.txt' was not restored." in result.output
        assert "Checked out branch 'b1'." in result.output
        assert "message: first" in result.output
