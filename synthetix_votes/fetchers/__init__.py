from .contracts import (
    DEBT_CACHE_ABI,
    SYNTHETIX_STATE_ABI,
    load_last_debt_ledger_entry,
    load_total_primary_debt,
)
from .subgraph import (
    MAX_FIRST,
    build_holders_query,
    parse_holders,
    query_holders,
    SubgraphHolderSource,
    StaticHolderSource,
    FallbackHolderSource,
)

__all__ = [
    "DEBT_CACHE_ABI",
    "SYNTHETIX_STATE_ABI",
    "load_last_debt_ledger_entry",
    "load_total_primary_debt",
    "MAX_FIRST",
    "build_holders_query",
    "parse_holders",
    "query_holders",
    "SubgraphHolderSource",
    "StaticHolderSource",
    "FallbackHolderSource",
]
