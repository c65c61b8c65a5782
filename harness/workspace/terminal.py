"""Terminal helpers — scrape shell logs and run commands inside the project."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import time
from pathlib import Path

from harness.core.config import get_settings
from harness.core.errors import CommandError, CommandTimeoutError, TerminalLogError
from harness.core.types import CommandOutput

logger = logging.getLogger(__name__)


# ── Shell logs ───────────────────────────────────────────────────────────────


def _read_log(filename: str) -> str:
    path = get_settings().logs_path / filename
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TerminalLogError(f"Could not find {path}") from exc


def get_terminal_output() -> str:
    """Everything the learner's terminal has printed so far."""
    logs = _read_log(get_settings().terminal_log_file)
    if not logs:
        raise TerminalLogError("No terminal logs found")
    return logs


def get_last_command(how_many_back: int = 0) -> str | None:
    """A command from the bash history, counting back from the most recent.

    The history log ends with a newline, so the most recent command is the
    second-to-last split line. Returns ``None`` when the history is shorter
    than ``how_many_back``.
    """
    settings = get_settings()
    logs = _read_log(settings.bash_history_file)
    if not logs:
        raise TerminalLogError(
            f"Could not find {settings.logs_path / settings.bash_history_file}"
        )

    lines = logs.split("\n")
    index = len(lines) - how_many_back - 2
    if index < 0 or how_many_back < 0:
        return None
    return lines[index]


def get_cwd() -> str:
    """Contents of the working-directory log."""
    return _read_log(get_settings().cwd_log_file)


# ── Command execution ────────────────────────────────────────────────────────


def _command_dir(path: str | Path) -> Path:
    return get_settings().project_root / path


def _truncate(text: str) -> str:
    return text[: get_settings().command_output_limit]


async def get_command_output(
    command: str, path: str | Path = "", timeout: float | None = None
) -> CommandOutput:
    """Run ``command`` through the configured shell and capture its output.

    Args:
        command: Shell command line.
        path: Working directory relative to the project root.
        timeout: Seconds to wait; defaults to ``command_timeout_seconds``.

    Raises:
        CommandError: The command exited non-zero.
        CommandTimeoutError: The command did not finish in time.
    """
    settings = get_settings()
    timeout = settings.command_timeout_seconds if timeout is None else timeout
    start = time.time()

    proc = await asyncio.create_subprocess_shell(
        command,
        cwd=str(_command_dir(path)),
        executable=settings.command_shell,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        proc.kill()
        await proc.wait()
        raise CommandTimeoutError(f"Command timed out after {timeout}s: {command}") from exc

    duration = time.time() - start
    output = CommandOutput(
        stdout=_truncate(stdout.decode("utf-8", errors="replace")),
        stderr=_truncate(stderr.decode("utf-8", errors="replace")),
        exit_code=proc.returncode or 0,
        duration_seconds=duration,
    )

    if output.exit_code != 0:
        logger.warning(
            "Command failed",
            extra={
                "command": command,
                "exit_code": output.exit_code,
                "duration_ms": int(duration * 1000),
            },
        )
        raise CommandError(
            f"Command failed with exit code {output.exit_code}: {command}",
            exit_code=output.exit_code,
            stdout=output.stdout,
            stderr=output.stderr,
        )
    return output


def run_command(command: str, path: str | Path = "") -> None:
    """Run ``command`` synchronously, raising on a non-zero exit."""
    settings = get_settings()
    try:
        subprocess.run(
            command,
            shell=True,
            executable=settings.command_shell,
            cwd=_command_dir(path),
            check=True,
            capture_output=True,
            text=True,
            timeout=settings.command_timeout_seconds,
        )
    except subprocess.CalledProcessError as exc:
        logger.warning("Command failed", extra={"command": command, "exit_code": exc.returncode})
        raise CommandError(
            f"Command failed with exit code {exc.returncode}: {command}",
            exit_code=exc.returncode,
            stdout=exc.stdout or "",
            stderr=exc.stderr or "",
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(
            f"Command timed out after {settings.command_timeout_seconds}s: {command}"
        ) from exc
