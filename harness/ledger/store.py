"""JSON-backed ledger and pool stores for a learner's project."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from harness.core.config import get_settings
from harness.core.errors import InvalidInputError, ProjectFileError
from harness.core.types import Block, ContractRecord
from harness.ledger.resolver import coerce_block, iter_pool_records, resolve_contract

logger = logging.getLogger(__name__)


class ContractStore:
    """Reads ``blockchain.json`` and ``smart-contracts.json`` from a project.

    Both files are read in full on every call, in persisted order.
    """

    def __init__(
        self,
        project_dir: str | Path,
        ledger_file: str | None = None,
        pool_file: str | None = None,
    ) -> None:
        settings = get_settings()
        self._dir = Path(project_dir)
        self._ledger_path = self._dir / (ledger_file or settings.ledger_file)
        self._pool_path = self._dir / (pool_file or settings.pool_file)

    @property
    def ledger_path(self) -> Path:
        return self._ledger_path

    @property
    def pool_path(self) -> Path:
        return self._pool_path

    def load_ledger(self) -> list[Block]:
        raw = self._read_array(self._ledger_path)
        return [coerce_block(item, index) for index, item in enumerate(raw)]

    def load_pool(self) -> list[ContractRecord]:
        return list(iter_pool_records(self._read_array(self._pool_path)))

    def get_contract(self, address: str, include_pool: bool = True) -> ContractRecord | None:
        """Resolve ``address`` from the ledger and, optionally, the pool."""
        ledger = self.load_ledger()
        pool = self.load_pool() if include_pool else None
        return resolve_contract(ledger, address, pool)

    @staticmethod
    def _read_array(path: Path) -> list[Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ProjectFileError(f"Store file not found: {path}") from exc
        except json.JSONDecodeError as exc:
            raise ProjectFileError(f"Store file is not valid JSON: {path}: {exc}") from exc

        if not isinstance(data, list):
            raise InvalidInputError(
                f"Store file must hold a JSON array: {path} (got {type(data).__name__})"
            )
        logger.debug("Loaded %d entries", len(data), extra={"path": str(path)})
        return data


def get_contract(
    contract_address: str,
    cwd: str | Path,
    include_pool: bool = True,
) -> ContractRecord | None:
    """Latest state of a contract in the project directory ``cwd``.

    ``cwd`` is resolved against the configured project root.
    """
    store = ContractStore(get_settings().project_root / cwd)
    return store.get_contract(contract_address, include_pool=include_pool)
