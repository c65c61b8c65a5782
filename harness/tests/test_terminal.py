"""Tests for harness.workspace.terminal — shell logs and command execution."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from harness.core.errors import CommandError, CommandTimeoutError, ErrorCode, TerminalLogError
from harness.core.types import CommandOutput
from harness.workspace.terminal import (
    get_command_output,
    get_cwd,
    get_last_command,
    get_terminal_output,
    run_command,
)


# ── Shell logs ───────────────────────────────────────────────────────────────


class TestTerminalOutput:
    def test_reads_terminal_log(self, logs_dir: Path):
        (logs_dir / ".terminal-out.log").write_text("Block mined!\n", encoding="utf-8")
        assert get_terminal_output() == "Block mined!\n"

    def test_empty_log_raises(self, logs_dir: Path):
        (logs_dir / ".terminal-out.log").write_text("", encoding="utf-8")
        with pytest.raises(TerminalLogError, match="No terminal logs found") as exc_info:
            get_terminal_output()
        assert exc_info.value.code is ErrorCode.TERMINAL_LOG_MISSING

    def test_missing_log_raises(self, logs_dir: Path):
        with pytest.raises(TerminalLogError, match="Could not find"):
            get_terminal_output()


class TestLastCommand:
    @pytest.fixture
    def history(self, logs_dir: Path) -> Path:
        path = logs_dir / ".bash_history.log"
        path.write_text("npm install\nnode mine-block.js\nnode get-balance.js\n", encoding="utf-8")
        return path

    def test_most_recent(self, history: Path):
        assert get_last_command() == "node get-balance.js"

    def test_counting_back(self, history: Path):
        assert get_last_command(1) == "node mine-block.js"
        assert get_last_command(2) == "npm install"

    def test_beyond_history_is_none(self, history: Path):
        assert get_last_command(3) is None
        assert get_last_command(10) is None

    def test_negative_is_none(self, history: Path):
        assert get_last_command(-1) is None

    def test_empty_history_raises(self, logs_dir: Path):
        (logs_dir / ".bash_history.log").write_text("", encoding="utf-8")
        with pytest.raises(TerminalLogError):
            get_last_command()


class TestCwd:
    def test_reads_cwd_log(self, logs_dir: Path):
        (logs_dir / ".cwd.log").write_text("/workspace/project\n", encoding="utf-8")
        assert get_cwd() == "/workspace/project\n"

    def test_missing_cwd_log(self, logs_dir: Path):
        with pytest.raises(TerminalLogError):
            get_cwd()


# ── Command execution ────────────────────────────────────────────────────────


class TestGetCommandOutput:
    @pytest.mark.asyncio
    async def test_captures_stdout(self, project_root: Path):
        output = await get_command_output("echo hello")
        assert isinstance(output, CommandOutput)
        assert output.stdout == "hello\n"
        assert output.stderr == ""
        assert output.exit_code == 0
        assert output.duration_seconds >= 0

    @pytest.mark.asyncio
    async def test_captures_stderr(self, project_root: Path):
        output = await get_command_output("echo oops >&2")
        assert output.stderr == "oops\n"

    @pytest.mark.asyncio
    async def test_runs_in_project_sub_path(self, project_root: Path):
        (project_root / "learn").mkdir()
        output = await get_command_output("pwd", "learn")
        assert Path(output.stdout.strip()).resolve() == (project_root / "learn").resolve()

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, project_root: Path):
        with pytest.raises(CommandError) as exc_info:
            await get_command_output("echo partial; echo bad >&2; exit 3")
        assert exc_info.value.exit_code == 3
        assert exc_info.value.stdout == "partial\n"
        assert exc_info.value.stderr == "bad\n"

    @pytest.mark.asyncio
    async def test_timeout_raises(self, project_root: Path):
        with pytest.raises(CommandTimeoutError) as exc_info:
            await get_command_output("sleep 5", timeout=0.2)
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)


class TestRunCommand:
    def test_runs_in_project_sub_path(self, project_root: Path):
        (project_root / "learn").mkdir()
        run_command("touch made.txt", "learn")
        assert (project_root / "learn" / "made.txt").exists()

    def test_non_zero_exit_raises(self, project_root: Path):
        with pytest.raises(CommandError) as exc_info:
            run_command("echo nope >&2; exit 1")
        assert exc_info.value.exit_code == 1
        assert exc_info.value.stderr == "nope\n"
