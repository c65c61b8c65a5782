"""Ledger state resolver — derive a contract's current view from history.

Folds the committed ledger and then the pending pool, as one ordered
stream, into a single contract record:

  ledger blocks ──► block records ──┐
                                    ├──► merge_record ──► Accumulator ──► ContractRecord | None
  pending pool ─────────────────────┘

The first occurrence of an address fixes every field of the result; each
later occurrence only refreshes ``state``. Inputs are never mutated.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from harness.core.errors import InvalidInputError
from harness.core.types import Block, ContractRecord

logger = logging.getLogger(__name__)


# ── Accumulator ──────────────────────────────────────────────────────────────


class AccumulatorStatus(Enum):
    """Whether a contract identity has been established yet."""
    UNSET = "unset"
    SET = "set"


@dataclass(frozen=True)
class Accumulator:
    """Fold state: either unset, or set with the merged record so far."""

    status: AccumulatorStatus = AccumulatorStatus.UNSET
    record: ContractRecord | None = None

    @property
    def is_set(self) -> bool:
        return self.status is AccumulatorStatus.SET


UNSET = Accumulator()


def merge_record(accumulator: Accumulator, record: ContractRecord) -> Accumulator:
    """Merge one matching occurrence into the accumulator.

    First occurrence copies every field. Later occurrences replace ``state``
    only, and only when the occurrence carries one.
    """
    if not accumulator.is_set or accumulator.record is None:
        return Accumulator(AccumulatorStatus.SET, record.model_copy(deep=True))

    if not record.has_state:
        return accumulator

    refreshed = accumulator.record.model_copy(
        update={"state": copy.deepcopy(record.state)}
    )
    return Accumulator(AccumulatorStatus.SET, refreshed)


def fold_records(
    records: Iterable[ContractRecord],
    address: str,
    accumulator: Accumulator = UNSET,
) -> Accumulator:
    """Fold an ordered stream of records for ``address``."""
    for record in records:
        if record.address == address:
            accumulator = merge_record(accumulator, record)
    return accumulator


# ── Input coercion ───────────────────────────────────────────────────────────


def _require_sequence(value: Any, name: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Sequence):
        raise InvalidInputError(
            f"{name} must be an ordered sequence, got {type(value).__name__}"
        )
    return value


def coerce_block(raw: Any, index: int) -> Block:
    if isinstance(raw, Block):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInputError(
            f"ledger[{index}] must be a block mapping, got {type(raw).__name__}"
        )
    contracts = raw.get("smartContracts")
    if contracts is not None:
        _require_sequence(contracts, f"ledger[{index}].smartContracts")
    try:
        return Block.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error(f"ledger[{index}]", exc) from exc


def coerce_record(raw: Any, where: str) -> ContractRecord:
    if isinstance(raw, ContractRecord):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInputError(
            f"{where} must be a contract mapping, got {type(raw).__name__}"
        )
    try:
        return ContractRecord.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error(where, exc) from exc


def iter_ledger_records(ledger: Sequence[Block | Mapping[str, Any]]) -> Iterator[ContractRecord]:
    """Yield every contract record of the ledger in block order."""
    for index, raw in enumerate(_require_sequence(ledger, "ledger")):
        yield from coerce_block(raw, index).smart_contracts


def iter_pool_records(pool: Sequence[ContractRecord | Mapping[str, Any]]) -> Iterator[ContractRecord]:
    """Yield every pending contract record in pool order."""
    for index, raw in enumerate(_require_sequence(pool, "pool")):
        yield coerce_record(raw, f"pool[{index}]")


# ── Public API ───────────────────────────────────────────────────────────────


def resolve_contract(
    ledger: Sequence[Block | Mapping[str, Any]],
    address: str,
    pool: Sequence[ContractRecord | Mapping[str, Any]] | None = None,
) -> ContractRecord | None:
    """Resolve the current view of the contract at ``address``.

    Args:
        ledger: Blocks in commit order, oldest first. May be empty.
        address: Identity key of the contract to resolve.
        pool: Optional pending records; always treated as newer than the ledger.

    Returns:
        A fresh ``ContractRecord`` whose non-state fields come from the first
        occurrence and whose ``state`` comes from the last, or ``None`` when
        the address appears nowhere.

    Raises:
        InvalidInputError: ledger/pool is not a sequence, or a block or
            record is malformed (e.g. missing ``address``).
    """
    if not isinstance(address, str) or not address:
        raise InvalidInputError("address must be a non-empty string")

    accumulator = fold_records(iter_ledger_records(ledger), address)
    if pool is not None:
        accumulator = fold_records(iter_pool_records(pool), address, accumulator)

    if not accumulator.is_set:
        logger.debug("Contract not found", extra={"address": address})
        return None

    logger.debug("Contract resolved", extra={"address": address})
    return accumulator.record
