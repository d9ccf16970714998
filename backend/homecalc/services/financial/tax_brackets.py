"""
Progressive Bracket Tax.
Marginal-bracket evaluator shared by the Ontario provincial and
City of Toronto municipal land transfer taxes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from homecalc.services.financial.validation import require_finite


@dataclass(frozen=True)
class TaxBracket:
    lower_bound: float
    upper_bound: float  # Exclusive; math.inf for the top bracket
    rate: float  # Fraction, e.g. 0.015 for 1.5%


BracketTable = Tuple[TaxBracket, ...]


def _build_table(bounds: Sequence[float], rates: Sequence[float]) -> BracketTable:
    """Pair consecutive bounds with rates: bounds has one more entry than rates."""
    return tuple(
        TaxBracket(lower_bound=bounds[i], upper_bound=bounds[i + 1], rate=rates[i])
        for i in range(len(rates))
    )


ONTARIO_LTT_BRACKETS: BracketTable = _build_table(
    [0, 55000, 250000, 400000, 2000000, math.inf],
    [0.005, 0.01, 0.015, 0.02, 0.025],
)

TORONTO_LTT_BRACKETS: BracketTable = _build_table(
    [0, 55000, 250000, 400000, 2000000, 3000000, 4000000, 5000000, 10000000, 20000000, math.inf],
    [0.005, 0.01, 0.015, 0.02, 0.025, 0.035, 0.045, 0.055, 0.065, 0.075],
)


def _taxable_slice(amount: float, bracket: TaxBracket) -> float:
    return max(0.0, min(amount, bracket.upper_bound) - bracket.lower_bound)


def evaluate_bracket_tax(amount: float, brackets: BracketTable) -> float:
    """
    Tax owed on ``amount`` under a progressive bracket table.

    Each bracket's rate applies only to the slice of the amount that falls
    inside it. The table must be ordered, contiguous and start at 0; that is
    not checked here.
    """
    amount = require_finite("amount", amount)
    if amount <= 0:
        return 0.0

    tax = 0.0
    for bracket in brackets:
        if amount > bracket.lower_bound:
            tax += _taxable_slice(amount, bracket) * bracket.rate
    return tax


def bracket_breakdown(amount: float, brackets: BracketTable) -> List[Dict[str, Any]]:
    """Per-bracket detail for every bracket the amount reaches."""
    amount = require_finite("amount", amount)
    breakdown: List[Dict[str, Any]] = []
    for bracket in brackets:
        if amount <= bracket.lower_bound:
            continue
        taxable = _taxable_slice(amount, bracket)
        breakdown.append({
            "lower_bound": bracket.lower_bound,
            "upper_bound": None if math.isinf(bracket.upper_bound) else bracket.upper_bound,
            "rate": bracket.rate,
            "taxable_amount": taxable,
            "tax": taxable * bracket.rate,
        })
    return breakdown
