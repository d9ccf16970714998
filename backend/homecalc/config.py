from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Stress test (minimum qualifying rate)
    stress_test_benchmark_rate: float = 5.25  # Floor qualifying rate, percent
    stress_test_buffer: float = 2.0  # Added to the contract rate, percent points

    # First-time buyer land transfer tax rebates (max refund per jurisdiction)
    ontario_ftb_rebate_cap: float = 4000
    toronto_ftb_rebate_cap: float = 4475

    # Mortgage default insurance
    insurance_price_ceiling: float = 1500000  # Purchases at or above are not insurable

    # Closing costs used when no itemized breakdown is supplied (legal + appraisal + inspection)
    default_closing_costs: float = 2300

    # Lender rates
    rate_cache_ttl_seconds: int = 3600  # 1 hour

    # Debt service guidance thresholds, percent of gross monthly income
    gds_limit_percent: float = 32
    tds_limit_percent: float = 40

    # CORS
    frontend_url: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None  # Path to an optional log file; unset disables file logging

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
