"""Client settings for the wallet API."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

VERSION = "0.1.0"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8070
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_FEE = Decimal("0.1")
DEFAULT_DECIMAL_DIVISOR = 100000000
DEFAULT_USER_AGENT = f"walletapi-client/{VERSION}"

# Node used by open/create/import when the caller names none.
DEFAULT_DAEMON_HOST = "127.0.0.1"
DEFAULT_DAEMON_PORT = 14486


class ClientConfig(BaseModel):
    """Immutable connection and transaction defaults for one client."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, gt=0, lt=65536)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    use_tls: bool = False
    api_key: str
    default_mixin: Optional[int] = Field(default=None, ge=0)
    default_fee: Decimal = Field(default=DEFAULT_FEE, ge=0)
    decimal_divisor: int = Field(default=DEFAULT_DECIMAL_DIVISOR, gt=0)
    default_unlock_time: int = Field(default=0, ge=0)
    user_agent: str = DEFAULT_USER_AGENT

    model_config = {"frozen": True}

    @field_validator("api_key")
    @classmethod
    def _api_key_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Must supply an API key")
        return value

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_tls else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self.timeout_ms / 1000
