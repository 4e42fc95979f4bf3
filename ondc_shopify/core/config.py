import os
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from dotenv import find_dotenv, load_dotenv

from ondc_shopify.exceptions import ConfigError

DEFAULT_SHOPIFY_URL = "https://testgamaa.myshopify.com"


@dataclass(frozen=True)
class Settings:
    # Shopify backend
    shopify_url: str = DEFAULT_SHOPIFY_URL
    shopify_access_token: str = field(default="", repr=False)
    shopify_api_version: str = "2025-01"
    shopify_timeout: float = 10.0

    # ONDC participant
    bpp_id: str = ""
    bpp_uri: str = ""
    core_version: str = "1.2.0"
    currency: str = "INR"

    # pricing
    default_discount_percent: Decimal = Decimal("10")
    delivery_fee: Decimal = Decimal("30.00")

    # background jobs
    callback_timeout: float = 10.0
    worker_concurrency: int = 8
    worker_max_pending: int = 100
    job_timeout: float = 30.0

    # init: billing placeholders
    billing_name: str = "ONDC Buyer"
    billing_phone: str = "9999999999"
    billing_email: str = "buyer@example.com"
    billing_building: str = "Building 1"
    billing_locality: str = "Locality"
    billing_city: str = "Bengaluru"
    billing_state: str = "Karnataka"
    billing_country: str = "IND"
    billing_area_code: str = "560001"

    # init: payment pass-through
    finder_fee_type: str = "percent"
    finder_fee_amount: str = "3"
    withholding_amount: str = "10.00"
    payment_success_code: str = "00"
    payment_error_code: str = "01"
    payment_uri: str = "https://sellerNP.com/pay"

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 9090

    @property
    def has_shopify_credentials(self) -> bool:
        return bool(self.shopify_url and self.shopify_access_token)

    def redacted(self) -> Dict[str, Any]:
        """Settings as a dict that is safe to log."""
        out = asdict(self)
        out["shopify_access_token"] = "**REDACTED**" if self.shopify_access_token else "EMPTY"
        return out


def _env(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _decimal(name: str, default: str) -> Decimal:
    raw = _env(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ConfigError(f"{name} must be a decimal number, got {raw!r}") from None


def _number(name: str, default: str, kind=float):
    raw = _env(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def get_settings() -> Settings:
    """Read the environment (and .env, if present) once into a Settings object."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        shopify_url=(_env("SHOPIFY_URL", "") or DEFAULT_SHOPIFY_URL).rstrip("/"),
        shopify_access_token=_env("SHOPIFY_ACCESS_TOKEN", ""),
        shopify_api_version=_env("SHOPIFY_API_VERSION", "2025-01"),
        shopify_timeout=_number("SHOPIFY_TIMEOUT", "10"),
        bpp_id=_env("BPP_ID", ""),
        bpp_uri=_env("BPP_URI", ""),
        core_version=_env("ONDC_CORE_VERSION", "1.2.0"),
        currency=_env("ONDC_CURRENCY", "INR"),
        default_discount_percent=_decimal("DEFAULT_DISCOUNT_PERCENT", "10"),
        delivery_fee=_decimal("DELIVERY_FEE", "30.00"),
        callback_timeout=_number("CALLBACK_TIMEOUT", "10"),
        worker_concurrency=_number("WORKER_CONCURRENCY", "8", int),
        worker_max_pending=_number("WORKER_MAX_PENDING", "100", int),
        job_timeout=_number("JOB_TIMEOUT", "30"),
        billing_name=_env("BILLING_NAME", "ONDC Buyer"),
        billing_phone=_env("BILLING_PHONE", "9999999999"),
        billing_email=_env("BILLING_EMAIL", "buyer@example.com"),
        billing_building=_env("BILLING_BUILDING", "Building 1"),
        billing_locality=_env("BILLING_LOCALITY", "Locality"),
        billing_city=_env("BILLING_CITY", "Bengaluru"),
        billing_state=_env("BILLING_STATE", "Karnataka"),
        billing_country=_env("BILLING_COUNTRY", "IND"),
        billing_area_code=_env("BILLING_AREA_CODE", "560001"),
        finder_fee_type=_env("FINDER_FEE_TYPE", "percent"),
        finder_fee_amount=_env("FINDER_FEE_AMOUNT", "3"),
        withholding_amount=_env("WITHHOLDING_AMOUNT", "10.00"),
        payment_success_code=_env("PAYMENT_SUCCESS_CODE", "00"),
        payment_error_code=_env("PAYMENT_ERROR_CODE", "01"),
        payment_uri=_env("PAYMENT_URI", "https://sellerNP.com/pay"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        host=_env("HOST", "0.0.0.0"),
        port=_number("PORT", "9090", int),
    )
