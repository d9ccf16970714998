from homecalc.services.rates.cache import RateCache, RateSnapshot
from homecalc.services.rates.lender_rates import FALLBACK_RATES, LenderRate, lowest_rate

__all__ = ["FALLBACK_RATES", "LenderRate", "RateCache", "RateSnapshot", "lowest_rate"]
