"""
Strategy configuration defaults.

Contract addresses, subgraph endpoints and the hand-maintained secondary-chain
constants. Every value can be overridden with an SNX_VOTES_* environment
variable or through a StrategyConfig JSON file.
"""

import os

# NOTE: check these against https://contracts.synthetix.io before each vote
SYNTHETIX_STATE_ADDRESS = os.getenv(
    "SNX_VOTES_SYNTHETIX_STATE_ADDRESS", "0x4b9Ca5607f1fF8019c1C6A3c2f0CC8de622D5B82"
)
DEBT_CACHE_ADDRESS = os.getenv(
    "SNX_VOTES_DEBT_CACHE_ADDRESS", "0xe92B4c7428152052B0930c81F4c687a5F1A12292"
)

# Subgraph endpoints keyed by chain id
DEFAULT_GRAPHS = {
    "1": os.getenv(
        "SNX_VOTES_PRIMARY_SUBGRAPH",
        "https://api.thegraph.com/subgraphs/name/killerbyte/synthetix"
    ),
    "10": os.getenv(
        "SNX_VOTES_SECONDARY_SUBGRAPH",
        "https://api.thegraph.com/subgraphs/name/synthetixio-team/optimism-issuance"
    ),
}

PRIMARY_CHAIN_ID = "1"
SECONDARY_CHAIN_ID = "10"

# Secondary chain (OVM) constants - update by hand for every snapshot:
# currentDebt from https://contracts.synthetix.io/ovm/DebtCache
# lastDebtLedgerEntry from https://contracts.synthetix.io/ovm/SynthetixState
SECONDARY_CONSTANTS = {
    "total_secondary_debt": float(os.getenv("SNX_VOTES_TOTAL_SECONDARY_DEBT", 22617610)),
    "secondary_last_debt_ledger_entry": int(
        os.getenv("SNX_VOTES_SECONDARY_LAST_DEBT_LEDGER_ENTRY", 20222730523217499684984991)
    ),
    # OVM:ETH c-ratio comparison at the time of snapshot
    "secondary_c_ratio_normalization": float(
        os.getenv("SNX_VOTES_SECONDARY_C_RATIO_NORMALIZATION", 600 / 450)
    ),
    "secondary_block_number": int(os.getenv("SNX_VOTES_SECONDARY_BLOCK_NUMBER", 1770186)),
}

# Subgraph query settings
QUERY_CONFIG = {
    "first": int(os.getenv("SNX_VOTES_QUERY_FIRST", 1000)),
    "timeout": int(os.getenv("SNX_VOTES_QUERY_TIMEOUT", 30)),
    "strict": os.getenv("SNX_VOTES_STRICT", "false").lower() in ("1", "true", "yes"),
}

RPC_URL = os.getenv("SNX_VOTES_RPC_URL")
LOG_LEVEL = os.getenv("SNX_VOTES_LOG_LEVEL", "INFO")
