import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from typing import List, Literal, Optional

from homecalc.services.rates.cache import RateCache
from homecalc.services.rates.lender_rates import lowest_rate

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Schemas ---

class LenderRateItem(BaseModel):
    lender_name: str
    rate_percent: float
    type: str


class RatesResponse(BaseModel):
    rates: List[LenderRateItem]
    cached: bool
    fallback: bool
    last_updated: Optional[str] = None
    error: Optional[str] = None


# --- Dependencies ---

def get_rate_cache(request: Request) -> RateCache:
    return request.app.state.rate_cache


# --- Endpoints ---

@router.get("", response_model=RatesResponse)
def get_rates(cache: RateCache = Depends(get_rate_cache)):
    """Current lender rates, served from cache within the TTL."""
    return cache.get_or_refresh(time.time()).to_dict()


@router.get("/lowest", response_model=LenderRateItem)
def get_lowest_rate(
    type: Literal["fixed", "variable"] = "fixed",
    cache: RateCache = Depends(get_rate_cache),
):
    """Lowest posted rate of the given type."""
    snapshot = cache.get_or_refresh(time.time())
    best = lowest_rate(snapshot.rates, type)
    if best is None:
        raise HTTPException(status_code=404, detail=f"No {type} rates available")
    logger.debug(f"Lowest {type} rate: {best.lender_name} {best.rate_percent}%")
    return best.to_dict()
