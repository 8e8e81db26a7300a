"""
Synthetix debt-weighted voting strategy.

Scores each address by its share of Synthetix system debt across the primary
chain (read live from DebtCache / SynthetixState and the issuance subgraph)
and the secondary chain (subgraph plus hand-maintained debt figures).

Quick Start:
    from web3 import Web3
    from synthetix_votes import strategy

    w3 = Web3(Web3.HTTPProvider(rpc_url))
    scores = strategy("snxgov.eth", "1", w3, addresses, {}, 13_000_000)
"""

__version__ = "1.0.0"

from .config import StrategyConfig, validate_config, load_config
from .core import (
    # Entry points
    strategy,
    compute_scores,
    # Models
    HolderRecord,
    DebtSnapshot,
    ScoreResult,
    # Scoring
    weighted_vote,
    # Errors
    StrategyError,
    ProviderError,
    QueryError,
    MalformedResponseError,
    ConfigError,
)
from .fetchers import SubgraphHolderSource, StaticHolderSource, FallbackHolderSource

__all__ = [
    "__version__",
    "StrategyConfig",
    "validate_config",
    "load_config",
    "strategy",
    "compute_scores",
    "HolderRecord",
    "DebtSnapshot",
    "ScoreResult",
    "weighted_vote",
    "StrategyError",
    "ProviderError",
    "QueryError",
    "MalformedResponseError",
    "ConfigError",
    "SubgraphHolderSource",
    "StaticHolderSource",
    "FallbackHolderSource",
]
