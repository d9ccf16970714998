"""
Mortgage Default Insurance (CMHC).
Premium is a percentage of the loan, chosen by down payment tier.
"""

from dataclasses import dataclass
from typing import Tuple

from homecalc.config import settings
from homecalc.services.financial.validation import require_finite


@dataclass(frozen=True)
class InsuranceTier:
    min_down_payment_percent: float
    premium_rate: float


# Highest down payment first; the first tier the down payment reaches wins.
INSURANCE_TIERS: Tuple[InsuranceTier, ...] = (
    InsuranceTier(min_down_payment_percent=20, premium_rate=0.0),
    InsuranceTier(min_down_payment_percent=15, premium_rate=0.028),
    InsuranceTier(min_down_payment_percent=10, premium_rate=0.031),
    InsuranceTier(min_down_payment_percent=0, premium_rate=0.04),
)


def premium_rate_for(down_payment_percent: float) -> float:
    for tier in INSURANCE_TIERS:
        if down_payment_percent >= tier.min_down_payment_percent:
            return tier.premium_rate
    # Negative down payment: treat as the smallest tier
    return INSURANCE_TIERS[-1].premium_rate


def compute_insurance_premium(price: float, down_payment_percent: float) -> float:
    """
    CMHC premium added to the mortgage principal.

    Purchases at or above the insurable price ceiling carry no premium
    regardless of down payment. Down payments under 5% are disallowed by
    lenders but still priced at the 4% tier here.
    """
    price = require_finite("price", price)
    down_payment_percent = require_finite("down_payment_percent", down_payment_percent)

    if price >= settings.insurance_price_ceiling:
        return 0.0

    rate = premium_rate_for(down_payment_percent)
    if rate == 0:
        return 0.0

    down_payment_amount = price * down_payment_percent / 100
    return (price - down_payment_amount) * rate
