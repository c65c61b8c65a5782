"""Shared fixtures for the harness test suite."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Iterator
from unittest.mock import patch

import pytest

from harness.core.config import get_settings


# ── Project Root ─────────────────────────────────────────────────────────────


@pytest.fixture
def project_root(tmp_path: Path) -> Iterator[Path]:
    """Point the harness at a fresh temporary project root."""
    with patch.dict(os.environ, {"HARNESS_PROJECT_ROOT": str(tmp_path)}):
        get_settings.cache_clear()
        yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def logs_dir(project_root: Path) -> Path:
    """Create the ``.logs`` directory the terminal helpers read from."""
    path = project_root / ".logs"
    path.mkdir()
    return path


def write_json(path: Path, content: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(content, indent=2), encoding="utf-8")
    return path


# ── Ledger Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def fundraiser_ledger() -> list[dict[str, Any]]:
    """A ledger where one fundraiser contract is created and then donated to."""
    return [
        {
            "hash": "0",
            "previousHash": None,
            "transactions": [],
        },
        {
            "hash": "a1",
            "previousHash": "0",
            "smartContracts": [
                {
                    "address": "fund-1",
                    "owner": "alice",
                    "goal": 100,
                    "state": {"raised": 0, "donors": []},
                },
                {
                    "address": "other",
                    "owner": "bob",
                    "state": {"raised": 0},
                },
            ],
        },
        {
            "hash": "b2",
            "previousHash": "a1",
            "smartContracts": [
                {
                    "address": "fund-1",
                    "owner": "mallory",
                    "state": {"raised": 40, "donors": ["carol"]},
                },
            ],
        },
    ]


@pytest.fixture
def fundraiser_pool() -> list[dict[str, Any]]:
    """Pending contract updates not yet mined into a block."""
    return [
        {
            "address": "fund-1",
            "state": {"raised": 65, "donors": ["carol", "dave"]},
        },
        {
            "address": "pending-only",
            "owner": "erin",
            "state": {"raised": 0},
        },
    ]


@pytest.fixture
def fundraiser_project(
    project_root: Path,
    fundraiser_ledger: list[dict[str, Any]],
    fundraiser_pool: list[dict[str, Any]],
) -> Path:
    """A project folder holding both store files."""
    project = project_root / "fundraiser"
    write_json(project / "blockchain.json", fundraiser_ledger)
    write_json(project / "smart-contracts.json", fundraiser_pool)
    return project
