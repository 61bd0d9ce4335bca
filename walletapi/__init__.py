"""Async Python client for the wallet API service."""

from walletapi.client import WalletAPIClient
from walletapi.config import VERSION, ClientConfig
from walletapi.errors import (
    AuthenticationError,
    ConfigurationError,
    InputError,
    NotFoundError,
    RequestError,
    ResponseFormatError,
    ServerError,
    TransportError,
    WalletAPIError,
    WalletNotOpenError,
    classify_error,
)
from walletapi.models import (
    Balance,
    NodeInfo,
    StatusInfo,
    TransactionInfo,
    Transfer,
    TransferDestination,
    ValidationInfo,
    WalletKeys,
)

__version__ = VERSION

__all__ = [
    "WalletAPIClient",
    "ClientConfig",
    "WalletAPIError",
    "ConfigurationError",
    "InputError",
    "TransportError",
    "ResponseFormatError",
    "RequestError",
    "AuthenticationError",
    "WalletNotOpenError",
    "NotFoundError",
    "ServerError",
    "classify_error",
    "Balance",
    "NodeInfo",
    "StatusInfo",
    "TransactionInfo",
    "Transfer",
    "TransferDestination",
    "ValidationInfo",
    "WalletKeys",
]
