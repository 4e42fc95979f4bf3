"""
Adapter exception hierarchy.
"""
from typing import Optional


class AdapterError(Exception):
    """Base exception for the adapter."""


class ConfigError(AdapterError):
    """Invalid configuration value found at start-up."""


class CallbackDeliveryError(AdapterError):
    """
    The BAP callback could not be delivered.

    Raised for transport failures and non-2xx answers alike; status_code is
    None when no HTTP response was received.
    """

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)
