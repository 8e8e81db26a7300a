"""
Synthetix debt-weighted voting strategy.

Score = holder's share of combined primary + secondary chain debt * 1e5.

Stages, run in order:
1. Read total debt and last debt ledger entry from the primary chain
2. Take the secondary chain figures from configuration
3. Score primary chain holders at the snapshot block
4. Score secondary chain holders at the configured secondary block and add
   them to any primary score for the same address
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from web3 import Web3

from ..config.schema import StrategyConfig, validate_config
from ..fetchers.contracts import load_last_debt_ledger_entry, load_total_primary_debt
from ..fetchers.subgraph import SubgraphHolderSource
from .exceptions import ConfigError
from .models import BlockTag, DebtSnapshot, HolderRecord, ScoreResult, normalize_block_tag
from .weighting import weighted_vote_primary, weighted_vote_secondary

AUTHOR = "andytcf"
VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def load_debt_snapshot(w3: Web3, block_tag: BlockTag, config: StrategyConfig) -> DebtSnapshot:
    """Read the primary chain figures and combine them with the configured secondary ones."""
    total_primary_debt, any_rate_invalid = load_total_primary_debt(
        w3, block_tag, config.debt_cache_address
    )
    last_debt_ledger_entry = load_last_debt_ledger_entry(
        w3, block_tag, config.synthetix_state_address
    )
    debt = DebtSnapshot(
        total_primary_debt=total_primary_debt,
        last_debt_ledger_entry=last_debt_ledger_entry,
        scaled_total_secondary_debt=config.scaled_total_secondary_debt,
        secondary_last_debt_ledger_entry=config.secondary_last_debt_ledger_entry,
        any_rate_invalid=any_rate_invalid,
    )
    logger.info(
        "Debt at %s: primary=%.2f scaled secondary=%.2f",
        block_tag, debt.total_primary_debt, debt.scaled_total_secondary_debt
    )
    return debt


def apply_primary_scores(scores: Dict[str, float], holders: Iterable[HolderRecord], debt: DebtSnapshot) -> None:
    """Write primary chain votes into scores, replacing any existing value."""
    for holder in holders:
        vote = weighted_vote_primary(
            holder.initial_debt_ownership,
            holder.debt_entry_at_index,
            debt.total_primary_debt,
            debt.scaled_total_secondary_debt,
            debt.last_debt_ledger_entry,
        )
        logger.debug("primary %s: %s", holder.id, vote)
        scores[Web3.to_checksum_address(holder.id)] = vote


def apply_secondary_scores(scores: Dict[str, float], holders: Iterable[HolderRecord], debt: DebtSnapshot) -> None:
    """Add secondary chain votes to scores. Zero or NaN primary scores are overwritten."""
    for holder in holders:
        vote = weighted_vote_secondary(
            holder.initial_debt_ownership,
            holder.debt_entry_at_index,
            debt.total_primary_debt,
            debt.scaled_total_secondary_debt,
            debt.secondary_last_debt_ledger_entry,
        )
        logger.debug("secondary %s: %s", holder.id, vote)
        address = Web3.to_checksum_address(holder.id)
        existing = scores.get(address)
        # A missing, zero or NaN primary score is replaced, not added to
        if existing and not math.isnan(existing):
            scores[address] = existing + vote
        else:
            scores[address] = vote


def compute_scores(
    w3: Web3,
    addresses: Iterable[str],
    snapshot: Any = "latest",
    config: Optional[StrategyConfig] = None,
    primary_source=None,
    secondary_source=None,
) -> ScoreResult:
    """
    Score addresses by their share of Synthetix debt on both chains.

    Args:
        w3: Web3 instance connected to the primary chain
        addresses: Addresses to score, any letter case
        snapshot: Block number or "latest"
        config: Strategy configuration (defaults from settings)
        primary_source: Holder source for the primary chain (default: subgraph)
        secondary_source: Holder source for the secondary chain (default: subgraph)

    Returns:
        ScoreResult with scores keyed by checksummed address

    Raises:
        ConfigError: configuration failed validation
        ProviderError: a contract call failed
        QueryError: a subgraph could not be queried
    """
    config = config or StrategyConfig.from_settings()
    validation = validate_config(config)
    if not validation["is_valid"]:
        raise ConfigError("Invalid strategy configuration", errors=validation["errors"])

    block_tag = normalize_block_tag(snapshot)
    result = ScoreResult(block_tag=block_tag, secondary_block=config.secondary_block_number)

    addresses: List[str] = list(addresses)
    if not addresses:
        return result

    if primary_source is None:
        primary_source = SubgraphHolderSource(
            config.primary_subgraph_url,
            first=config.query_first, timeout=config.query_timeout, strict=config.strict
        )
    if secondary_source is None:
        secondary_source = SubgraphHolderSource(
            config.secondary_subgraph_url,
            first=config.query_first, timeout=config.query_timeout, strict=config.strict
        )

    # web3 takes an int or a named tag here, so contract reads share the
    # subgraph block: any non-int snapshot reads at "latest"
    debt = load_debt_snapshot(w3, block_tag, config)
    result.any_rate_invalid = debt.any_rate_invalid
    result.total_primary_debt = debt.total_primary_debt
    result.scaled_total_secondary_debt = debt.scaled_total_secondary_debt

    primary_holders = primary_source.fetch(block_tag, addresses)
    apply_primary_scores(result.scores, primary_holders, debt)
    result.primary_holders = len(primary_holders)

    secondary_holders = secondary_source.fetch(config.secondary_block_number, addresses)
    apply_secondary_scores(result.scores, secondary_holders, debt)
    result.secondary_holders = len(secondary_holders)

    logger.info(
        "Scored %d of %d addresses (%d primary, %d secondary holders)",
        len(result.scores), len(addresses), result.primary_holders, result.secondary_holders
    )
    return result


def strategy(
    space: Any,
    network: Any,
    provider: Web3,
    addresses: Iterable[str],
    options: Any = None,
    snapshot: Any = "latest",
    config: Optional[StrategyConfig] = None,
) -> Dict[str, float]:
    """
    Strategy entry point called by the voting host.

    `space`, `network` and `options` are part of the host's calling
    convention and are not used here.
    """
    return compute_scores(provider, addresses, snapshot=snapshot, config=config).scores
