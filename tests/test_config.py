from decimal import Decimal

import pytest

from ondc_shopify.core.config import DEFAULT_SHOPIFY_URL, Settings, get_settings
from ondc_shopify.exceptions import ConfigError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    for name in ("SHOPIFY_URL", "SHOPIFY_ACCESS_TOKEN", "DELIVERY_FEE", "DEFAULT_DISCOUNT_PERCENT", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    s = get_settings()
    assert s.shopify_url == DEFAULT_SHOPIFY_URL
    assert s.shopify_access_token == ""
    assert s.delivery_fee == Decimal("30.00")
    assert s.default_discount_percent == Decimal("10")
    assert s.port == 9090
    assert not s.has_shopify_credentials


def test_env_overrides(clean_env):
    clean_env.setenv("SHOPIFY_URL", "https://other.myshopify.com/")
    clean_env.setenv("SHOPIFY_ACCESS_TOKEN", "shpat_x")
    clean_env.setenv("DELIVERY_FEE", "45.5")
    clean_env.setenv("LOG_LEVEL", "debug")
    s = get_settings()
    assert s.shopify_url == "https://other.myshopify.com"
    assert s.delivery_fee == Decimal("45.5")
    assert s.log_level == "DEBUG"
    assert s.has_shopify_credentials


def test_bad_number_raises_config_error(clean_env):
    clean_env.setenv("DELIVERY_FEE", "thirty")
    with pytest.raises(ConfigError, match="DELIVERY_FEE"):
        get_settings()


def test_token_is_redacted():
    s = Settings(shopify_access_token="shpat_secret")
    assert "shpat_secret" not in repr(s)
    assert s.redacted()["shopify_access_token"] == "**REDACTED**"
    assert Settings().redacted()["shopify_access_token"] == "EMPTY"
