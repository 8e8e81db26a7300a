"""
Primary chain debt reads.

Two parameterless view calls, both evaluated at the snapshot block:
- DebtCache.currentDebt() -> (debt, anyRateIsInvalid)
- SynthetixState.lastDebtLedgerEntry() -> uint256
"""

import logging
from typing import Tuple

from web3 import Web3

from ..core.exceptions import ProviderError
from ..core.models import BlockTag
from ..core.weighting import MED_PRECISE_UNIT

logger = logging.getLogger(__name__)


# =============================================================================
# ABI DEFINITIONS
# =============================================================================

DEBT_CACHE_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "currentDebt",
        "outputs": [
            {"internalType": "uint256", "name": "debt", "type": "uint256"},
            {"internalType": "bool", "name": "anyRateIsInvalid", "type": "bool"}
        ],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]

SYNTHETIX_STATE_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "lastDebtLedgerEntry",
        "outputs": [{"name": "", "type": "uint256"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function"
    }
]


# =============================================================================
# WEB3 QUERY FUNCTIONS
# =============================================================================

def load_last_debt_ledger_entry(
    w3: Web3,
    snapshot: BlockTag,
    contract_address: str
) -> int:
    """
    Read the most recent debt ledger entry from SynthetixState.

    Args:
        w3: Web3 instance connected to the primary chain
        snapshot: Block number or "latest"
        contract_address: SynthetixState address

    Returns:
        Raw ledger entry (1e27 fixed point)
    """
    try:
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=SYNTHETIX_STATE_ABI
        )
        entry = contract.functions.lastDebtLedgerEntry().call(block_identifier=snapshot)
    except Exception as e:
        raise ProviderError(
            "lastDebtLedgerEntry call failed",
            contract_address=contract_address,
            function_name="lastDebtLedgerEntry",
            block=snapshot,
            chain="primary",
            original_error=e,
        ) from e

    logger.debug("lastDebtLedgerEntry at %s: %s", snapshot, entry)
    return int(entry)


def load_total_primary_debt(
    w3: Web3,
    snapshot: BlockTag,
    contract_address: str
) -> Tuple[float, bool]:
    """
    Read total system debt from DebtCache.

    The anyRateIsInvalid flag does not stop scoring; it is returned so the
    caller can report it.

    Args:
        w3: Web3 instance connected to the primary chain
        snapshot: Block number or "latest"
        contract_address: DebtCache address

    Returns:
        Tuple of (debt in USD, any_rate_invalid)
    """
    try:
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=DEBT_CACHE_ABI
        )
        debt, any_rate_invalid = contract.functions.currentDebt().call(block_identifier=snapshot)
    except Exception as e:
        raise ProviderError(
            "currentDebt call failed",
            contract_address=contract_address,
            function_name="currentDebt",
            block=snapshot,
            chain="primary",
            original_error=e,
        ) from e

    if any_rate_invalid:
        logger.warning("DebtCache reports anyRateIsInvalid at %s; scoring anyway", snapshot)

    return float(debt) / MED_PRECISE_UNIT, bool(any_rate_invalid)
