from __future__ import annotations

from typing import Optional


class KitchenError(Exception):
    pass


class ConfigurationError(KitchenError):
    def __init__(self, details: str, error: Optional[str] = None):
        super().__init__(details)
        self.details = details
        self.error = error


class AuthenticationError(KitchenError):
    def __init__(self, message: str = "Admin session required"):
        super().__init__(message)
