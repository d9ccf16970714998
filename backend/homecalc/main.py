import logging
import sys
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from homecalc.config import settings
from homecalc.api import affordability, rental, scenarios, budget, rates
from homecalc.services.financial.validation import ValidationError
from homecalc.services.rates.cache import RateCache
from homecalc.services.rates.lender_rates import static_rates

# Configure logging so all loggers output to console
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    stream=sys.stdout,
)
if settings.log_file:
    Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logging.getLogger().addHandler(file_handler)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ontario Home Calculator",
    description="Mortgage affordability, land transfer tax, CMHC insurance and rental investment calculations for Ontario buyers",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rates come from the static table until a live source is wired in
app.state.rate_cache = RateCache(fetch=static_rates, ttl_seconds=settings.rate_cache_ttl_seconds)

# Include API routers
app.include_router(affordability.router, prefix="/api/affordability", tags=["Affordability"])
app.include_router(rental.router, prefix="/api/rental", tags=["Rental"])
app.include_router(scenarios.router, prefix="/api/scenarios", tags=["Scenarios"])
app.include_router(budget.router, prefix="/api/budget", tags=["Budget"])
app.include_router(rates.router, prefix="/api/rates", tags=["Rates"])


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "version": "1.0.0"}
