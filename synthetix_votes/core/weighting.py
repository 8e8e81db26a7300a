"""
Debt-weighted vote calculation.

A holder's vote is its share of the combined primary + secondary system debt,
scaled by 1e5. The inputs are 1e27 fixed-point integers, but the calculation
is done in double precision: published scores are computed the same way,
rounding included. Division by zero follows IEEE-754
(inf/nan) rather than raising.
"""

from typing import Union

import numpy as np

HIGH_PRECISE_UNIT = 1e27
MED_PRECISE_UNIT = 1e18
SCALING_FACTOR = 1e5

Number = Union[int, float, str]


def _to_double(value: Number) -> np.float64:
    # float() rounds to nearest for both ints and decimal strings
    return np.float64(float(value))


def weighted_vote(
    initial_debt_ownership: Number,
    debt_entry_at_index: Number,
    total_primary_debt: float,
    scaled_total_secondary_debt: float,
    last_debt_ledger_entry: Number,
) -> float:
    """
    Calculate the debt-weighted vote for one holder on one chain.

    Args:
        initial_debt_ownership: Holder's ownership at last position change (1e27)
        debt_entry_at_index: Debt ledger value when that ownership was recorded (1e27)
        total_primary_debt: Primary chain system debt in USD
        scaled_total_secondary_debt: Secondary chain debt, c-ratio normalized
        last_debt_ledger_entry: Latest debt ledger value of the holder's chain (1e27)

    Returns:
        Score (share of total system debt * 1e5)
    """
    ido = _to_double(initial_debt_ownership)
    dei = _to_double(debt_entry_at_index)
    lde = _to_double(last_debt_ledger_entry)
    l1_debt = np.float64(total_primary_debt)
    l2_debt = np.float64(scaled_total_secondary_debt)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        current_debt_ownership_percent = (lde / dei) * ido
        high_precision_balance = (
            l1_debt * MED_PRECISE_UNIT * (current_debt_ownership_percent / HIGH_PRECISE_UNIT)
        )
        current_debt_balance = high_precision_balance / MED_PRECISE_UNIT
        total_debt_in_system = l1_debt + l2_debt
        ownership_percent_of_total_debt = current_debt_balance / total_debt_in_system
        scaled_weighting = ownership_percent_of_total_debt * SCALING_FACTOR

    return float(scaled_weighting)


def weighted_vote_primary(
    initial_debt_ownership: Number,
    debt_entry_at_index: Number,
    total_primary_debt: float,
    scaled_total_secondary_debt: float,
    last_debt_ledger_entry: Number,
) -> float:
    """Primary chain vote, using the ledger entry read from chain."""
    return weighted_vote(
        initial_debt_ownership,
        debt_entry_at_index,
        total_primary_debt,
        scaled_total_secondary_debt,
        last_debt_ledger_entry,
    )


def weighted_vote_secondary(
    initial_debt_ownership: Number,
    debt_entry_at_index: Number,
    total_primary_debt: float,
    scaled_total_secondary_debt: float,
    secondary_last_debt_ledger_entry: Number,
) -> float:
    """Secondary chain vote, using the configured secondary ledger entry."""
    return weighted_vote(
        initial_debt_ownership,
        debt_entry_at_index,
        total_primary_debt,
        scaled_total_secondary_debt,
        secondary_last_debt_ledger_entry,
    )
