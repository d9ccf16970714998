"""
Land Transfer Tax.
Ontario provincial tax plus the City of Toronto municipal tax,
less first-time home buyer rebates.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from homecalc.config import settings
from homecalc.services.financial.tax_brackets import (
    ONTARIO_LTT_BRACKETS,
    TORONTO_LTT_BRACKETS,
    bracket_breakdown,
    evaluate_bracket_tax,
)
from homecalc.services.financial.validation import require_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LandTransferTaxResult:
    ontario_tax: float
    toronto_tax: float
    ontario_rebate: float
    toronto_rebate: float
    total: float
    ontario_breakdown: List[Dict[str, Any]] = field(default_factory=list)
    toronto_breakdown: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def net_ontario_tax(self) -> float:
        return self.ontario_tax - self.ontario_rebate

    @property
    def net_toronto_tax(self) -> float:
        return self.toronto_tax - self.toronto_rebate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ontario_tax": round(self.ontario_tax, 2),
            "toronto_tax": round(self.toronto_tax, 2),
            "ontario_rebate": round(self.ontario_rebate, 2),
            "toronto_rebate": round(self.toronto_rebate, 2),
            "net_ontario_tax": round(self.net_ontario_tax, 2),
            "net_toronto_tax": round(self.net_toronto_tax, 2),
            "total": round(self.total, 2),
            "has_rebate": self.ontario_rebate > 0 or self.toronto_rebate > 0,
            "ontario_breakdown": [_round_row(r) for r in self.ontario_breakdown],
            "toronto_breakdown": [_round_row(r) for r in self.toronto_breakdown],
        }


def _round_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        **row,
        "taxable_amount": round(row["taxable_amount"], 2),
        "tax": round(row["tax"], 2),
    }


def compute_land_transfer_tax(
    price: float,
    is_toronto: bool,
    is_first_time_buyer: bool,
    apply_rebate: bool = True,
) -> LandTransferTaxResult:
    """
    Compute provincial and municipal land transfer tax for a purchase.

    Rebates are capped at the raw tax of their jurisdiction, so the net tax is
    never negative. ``apply_rebate=False`` ignores first-time buyer status
    entirely (investment purchases).
    """
    price = require_finite("price", price)

    ontario_tax = evaluate_bracket_tax(price, ONTARIO_LTT_BRACKETS)
    toronto_tax = evaluate_bracket_tax(price, TORONTO_LTT_BRACKETS) if is_toronto else 0.0

    rebate_eligible = is_first_time_buyer and apply_rebate
    ontario_rebate = min(ontario_tax, settings.ontario_ftb_rebate_cap) if rebate_eligible else 0.0
    toronto_rebate = (
        min(toronto_tax, settings.toronto_ftb_rebate_cap)
        if (is_toronto and rebate_eligible)
        else 0.0
    )

    total = (ontario_tax - ontario_rebate) + (toronto_tax - toronto_rebate)
    logger.debug(
        f"LTT for ${price:,.0f} (toronto={is_toronto}, ftb={rebate_eligible}): ${total:,.2f}"
    )

    return LandTransferTaxResult(
        ontario_tax=ontario_tax,
        toronto_tax=toronto_tax,
        ontario_rebate=ontario_rebate,
        toronto_rebate=toronto_rebate,
        total=total,
        ontario_breakdown=bracket_breakdown(price, ONTARIO_LTT_BRACKETS),
        toronto_breakdown=bracket_breakdown(price, TORONTO_LTT_BRACKETS) if is_toronto else [],
    )
