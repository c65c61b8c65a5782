"""Core configuration for the curriculum harness."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Harness settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HARNESS_",
        case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "Curriculum Harness"
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # ── Project layout ───────────────────────────────────────────────────
    project_root: Path = Field(default_factory=Path.cwd)
    logs_dir: str = ".logs"
    terminal_log_file: str = ".terminal-out.log"
    bash_history_file: str = ".bash_history.log"
    cwd_log_file: str = ".cwd.log"

    # ── Contract stores ──────────────────────────────────────────────────
    ledger_file: str = "blockchain.json"
    pool_file: str = "smart-contracts.json"

    # ── Command execution ────────────────────────────────────────────────
    command_shell: str = "/bin/bash"
    command_timeout_seconds: float = 60.0
    command_output_limit: int = 50_000

    # ── Signing ──────────────────────────────────────────────────────────
    signature_curve: Literal["secp192r1", "secp256r1", "secp256k1"] = "secp192r1"

    @property
    def logs_path(self) -> Path:
        return self.project_root / self.logs_dir


@lru_cache
def get_settings() -> Settings:
    """Return cached settings singleton."""
    return Settings()
