"""
Lender Rates.
Posted 5-year fixed and variable rates from the major Canadian lenders.
The live source is supplied by the caller; the static table below is used
whenever that source is unavailable.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

FIXED = "fixed"
VARIABLE = "variable"
RATE_TYPES = (FIXED, VARIABLE)


@dataclass(frozen=True)
class LenderRate:
    lender_name: str
    rate_percent: float
    type: str  # "fixed" | "variable"

    def to_dict(self) -> Dict[str, Any]:
        return {"lender_name": self.lender_name, "rate_percent": self.rate_percent, "type": self.type}


FALLBACK_RATES: List[LenderRate] = [
    LenderRate("RBC", 4.84, FIXED),
    LenderRate("TD", 4.99, FIXED),
    LenderRate("Scotiabank", 5.09, FIXED),
    LenderRate("BMO", 4.79, FIXED),
    LenderRate("CIBC", 4.89, FIXED),
    LenderRate("National Bank", 4.94, FIXED),
    LenderRate("EQ Bank", 4.69, FIXED),
    LenderRate("Tangerine", 4.74, FIXED),
    LenderRate("RBC", 6.35, VARIABLE),
    LenderRate("TD", 6.45, VARIABLE),
    LenderRate("Scotiabank", 6.50, VARIABLE),
    LenderRate("BMO", 6.30, VARIABLE),
    LenderRate("CIBC", 6.40, VARIABLE),
    LenderRate("National Bank", 6.45, VARIABLE),
    LenderRate("EQ Bank", 6.10, VARIABLE),
    LenderRate("Tangerine", 6.15, VARIABLE),
]


def static_rates() -> List[LenderRate]:
    """Default rate source: the published fallback table."""
    return list(FALLBACK_RATES)


def parse_rates(records: Iterable[Dict[str, Any]]) -> List[LenderRate]:
    """
    Convert raw ``{name, rate, type}`` records into LenderRates.
    Records with a missing name, a non-numeric rate or an unknown type are skipped.
    """
    rates: List[LenderRate] = []
    for record in records:
        name = record.get("lender_name") or record.get("name")
        rate = record.get("rate_percent", record.get("rate"))
        rate_type = (record.get("type") or "").lower()
        if not name or rate_type not in RATE_TYPES:
            continue
        try:
            rates.append(LenderRate(str(name), float(rate), rate_type))
        except (TypeError, ValueError):
            continue
    return rates


def lowest_rate(rates: Iterable[LenderRate], rate_type: str = FIXED) -> Optional[LenderRate]:
    """Cheapest lender for the given rate type, or None if there is none."""
    candidates = [r for r in rates if r.type == rate_type]
    if not candidates:
        return None
    return min(candidates, key=lambda r: r.rate_percent)
