"""
Pytest configuration and fixtures for the Synthetix voting strategy.

This file contains shared fixtures used across all test modules.
Web3 and subgraph access are always mocked.
"""

import pytest
import sys
from pathlib import Path
from typing import Dict, Any, List
from unittest.mock import MagicMock, patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from synthetix_votes.config.schema import StrategyConfig


PRIMARY_GRAPH = "https://graph.test/subgraphs/name/synthetix"
SECONDARY_GRAPH = "https://graph.test/subgraphs/name/optimism-issuance"

HIGH = 10 ** 27


# =============================================================================
# ADDRESS FIXTURES
# =============================================================================

@pytest.fixture
def alice() -> str:
    """Checksummed voter address."""
    return "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


@pytest.fixture
def bob() -> str:
    return "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"


@pytest.fixture
def carol() -> str:
    return "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def strategy_config() -> StrategyConfig:
    """
    Config with round numbers: secondary debt 500k at ratio 1.0,
    secondary ledger entry 1e27.
    """
    return StrategyConfig(
        primary_subgraph_url=PRIMARY_GRAPH,
        secondary_subgraph_url=SECONDARY_GRAPH,
        total_secondary_debt=500_000.0,
        secondary_last_debt_ledger_entry=HIGH,
        secondary_c_ratio_normalization=1.0,
        secondary_block_number=1770186,
    )


@pytest.fixture
def config_factory():
    """
    Factory fixture for custom configurations.

    Usage:
        def test_something(config_factory):
            config = config_factory(query_first=10)
    """
    def _create_config(**overrides) -> StrategyConfig:
        base = {
            "primary_subgraph_url": PRIMARY_GRAPH,
            "secondary_subgraph_url": SECONDARY_GRAPH,
            "total_secondary_debt": 500_000.0,
            "secondary_last_debt_ledger_entry": HIGH,
            "secondary_c_ratio_normalization": 1.0,
            "secondary_block_number": 1770186,
        }
        base.update(overrides)
        return StrategyConfig(**base)

    return _create_config


# =============================================================================
# HOLDER FIXTURES
# =============================================================================

def holder_row(address: str, initial_debt_ownership: int, debt_entry_at_index: int) -> Dict[str, Any]:
    """Subgraph row as returned by The Graph (BigInt as strings, lower-case id)."""
    return {
        "id": address.lower(),
        "initialDebtOwnership": str(initial_debt_ownership),
        "debtEntryAtIndex": str(debt_entry_at_index),
    }


@pytest.fixture
def make_holder_row():
    return holder_row


def graph_payload(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"data": {"snxholders": rows}}


# =============================================================================
# MOCK FIXTURES FOR EXTERNAL APIS
# =============================================================================

@pytest.fixture
def make_web3():
    """
    Factory for a mock Web3 provider.

    Routes w3.eth.contract(...) by ABI to a DebtCache or SynthetixState mock.
    """
    def _make(total_debt_usd: float = 1_000_000, last_debt_ledger_entry: int = HIGH,
              any_rate_invalid: bool = False):
        debt_cache = MagicMock()
        debt_cache.functions.currentDebt.return_value.call.return_value = [
            int(total_debt_usd) * 10 ** 18, any_rate_invalid
        ]
        synthetix_state = MagicMock()
        synthetix_state.functions.lastDebtLedgerEntry.return_value.call.return_value = last_debt_ledger_entry

        def get_contract(address, abi):
            if abi[0]["name"] == "currentDebt":
                return debt_cache
            return synthetix_state

        w3 = MagicMock()
        w3.eth.contract = MagicMock(side_effect=get_contract)
        w3.debt_cache = debt_cache
        w3.synthetix_state = synthetix_state
        return w3

    return _make


@pytest.fixture
def mock_web3(make_web3):
    """Mock Web3 with 1M primary debt and ledger entry 1e27."""
    return make_web3()


def _response(payload, status_code: int = 200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def mock_subgraph():
    """
    Patch requests.post with per-endpoint payloads.

    Usage:
        def test_x(mock_subgraph):
            post = mock_subgraph(primary=[row, ...], secondary=[row, ...])
    """
    patcher = None

    def _install(primary=None, secondary=None, status_code: int = 200):
        nonlocal patcher
        payloads = {
            PRIMARY_GRAPH: graph_payload(primary or []),
            SECONDARY_GRAPH: graph_payload(secondary or []),
        }

        def post(url, json=None, timeout=None):
            return _response(payloads[url], status_code)

        patcher = patch("requests.post", side_effect=post)
        return patcher.start()

    yield _install

    if patcher is not None:
        patcher.stop()
