import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cordiweave.pricing.calculator import TAX_RATE, PricingConfig


class Settings(BaseSettings):
    app_name: str = "CordiWeave API"
    env: str = "local"

    api_prefix: str = "/v1"
    tax_rate: Decimal = Field(default=TAX_RATE, ge=0, lt=1)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CORDIWEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def pricing_config(self) -> PricingConfig:
        return PricingConfig(tax_rate=self.tax_rate)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
