"""Shared record types for ledgers, pools and command output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Ledger Records ───────────────────────────────────────────────────────────


class ContractRecord(BaseModel):
    """One occurrence of a smart contract in the ledger or the pool.

    ``address`` is the identity key and ``state`` the mutable payload.
    Everything else (owner, terms, creation metadata) is kept as extra
    fields and treated as fixed once the contract is first observed.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    address: str = Field(min_length=1)
    state: Any = None

    @property
    def has_state(self) -> bool:
        """Whether this occurrence carried a ``state`` key at all."""
        return "state" in self.model_fields_set

    @property
    def metadata(self) -> dict[str, Any]:
        """Creation-time fields other than ``address`` and ``state``."""
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        """Plain view holding only the keys that were observed."""
        data: dict[str, Any] = {"address": self.address}
        if self.has_state:
            data["state"] = self.state
        data.update(self.metadata)
        return data


class Block(BaseModel):
    """A ledger block. Only its attached contract records matter here."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    smart_contracts: list[ContractRecord] = Field(
        default_factory=list, alias="smartContracts"
    )

    @field_validator("smart_contracts", mode="before")
    @classmethod
    def missing_contracts_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value


# ── Command Output ───────────────────────────────────────────────────────────


class CommandOutput(BaseModel):
    """Captured output of a shell command run inside the project."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    duration_seconds: float = 0.0
