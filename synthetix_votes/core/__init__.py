from .exceptions import (
    StrategyError,
    ProviderError,
    QueryError,
    MalformedResponseError,
    ConfigError,
)
from .models import HolderRecord, DebtSnapshot, ScoreResult, normalize_block_tag
from .weighting import (
    HIGH_PRECISE_UNIT,
    MED_PRECISE_UNIT,
    SCALING_FACTOR,
    weighted_vote,
    weighted_vote_primary,
    weighted_vote_secondary,
)
from .strategy import (
    AUTHOR,
    VERSION,
    load_debt_snapshot,
    apply_primary_scores,
    apply_secondary_scores,
    compute_scores,
    strategy,
)

__all__ = [
    "StrategyError",
    "ProviderError",
    "QueryError",
    "MalformedResponseError",
    "ConfigError",
    "HolderRecord",
    "DebtSnapshot",
    "ScoreResult",
    "normalize_block_tag",
    "HIGH_PRECISE_UNIT",
    "MED_PRECISE_UNIT",
    "SCALING_FACTOR",
    "weighted_vote",
    "weighted_vote_primary",
    "weighted_vote_secondary",
    "AUTHOR",
    "VERSION",
    "load_debt_snapshot",
    "apply_primary_scores",
    "apply_secondary_scores",
    "compute_scores",
    "strategy",
]
