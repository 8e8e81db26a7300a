"""
Data models shared by the fetchers and the scorer.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Union

BlockTag = Union[int, str]


def _to_int(value: Any) -> int:
    # Subgraph null debt fields count as 0
    if value is None:
        return 0
    return int(value)


@dataclass(frozen=True)
class HolderRecord:
    """One snxholders row from a subgraph. Numeric fields are 1e27 fixed point."""
    id: str
    initial_debt_ownership: int
    debt_entry_at_index: int

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "HolderRecord":
        """Build from a raw subgraph row (BigInt values arrive as strings, null as 0)."""
        return cls(
            id=str(row["id"]).lower(),
            initial_debt_ownership=_to_int(row["initialDebtOwnership"]),
            debt_entry_at_index=_to_int(row["debtEntryAtIndex"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "initialDebtOwnership": str(self.initial_debt_ownership),
            "debtEntryAtIndex": str(self.debt_entry_at_index),
        }


@dataclass(frozen=True)
class DebtSnapshot:
    """Global debt figures for one scoring run."""
    total_primary_debt: float
    last_debt_ledger_entry: int
    scaled_total_secondary_debt: float
    secondary_last_debt_ledger_entry: int
    any_rate_invalid: bool = False


@dataclass
class ScoreResult:
    """Scores plus the figures they were computed from."""
    scores: Dict[str, float] = field(default_factory=dict)
    block_tag: BlockTag = "latest"
    secondary_block: int = 0
    any_rate_invalid: bool = False
    primary_holders: int = 0
    secondary_holders: int = 0
    total_primary_debt: float = 0.0
    scaled_total_secondary_debt: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def normalize_block_tag(snapshot: Any) -> BlockTag:
    """Block numbers pass through; anything else means the chain head."""
    if isinstance(snapshot, int) and not isinstance(snapshot, bool):
        return snapshot
    return "latest"
