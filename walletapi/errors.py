"""Wallet API error types and the status-code classification policy."""

from __future__ import annotations

from typing import Any, Optional


class WalletAPIError(Exception):
    """Error from the wallet API, the transport, or client-side validation."""

    code = "UNKNOWN_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        error_message: str = "",
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code
        self.message = message
        self.status_code = status_code
        self.error_message = error_message

    @classmethod
    def from_response(
        cls, status_code: int, body: Any = None, text: str = ""
    ) -> "WalletAPIError":
        """Create a classified error from an error response.

        The server detail is the body's ``errorMessage``, or the raw response
        text when the body is not a JSON object.
        """
        if isinstance(body, dict):
            error_message = body.get("errorMessage") or ""
        else:
            error_message = text.strip()
        return classify_error(status_code, error_message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class ConfigurationError(WalletAPIError):
    code = "CONFIGURATION_ERROR"


class InputError(WalletAPIError, ValueError):
    """Raised locally, before any request is made."""

    code = "INPUT_ERROR"


class TransportError(WalletAPIError):
    """The request never produced an HTTP response (refused, timed out...)."""

    code = "TRANSPORT_ERROR"


class ResponseFormatError(WalletAPIError):
    """A successful response whose body is not what the operation expects."""

    code = "INVALID_RESPONSE"


class RequestError(WalletAPIError):
    code = "BAD_REQUEST"


class AuthenticationError(WalletAPIError):
    code = "UNAUTHORIZED"


class WalletNotOpenError(WalletAPIError):
    code = "WALLET_NOT_OPEN"


class NotFoundError(WalletAPIError):
    code = "NOT_FOUND"


class ServerError(WalletAPIError):
    code = "SERVER_ERROR"


_STATUS_ERRORS: dict[int, tuple[type[WalletAPIError], str]] = {
    400: (
        RequestError,
        "A parse error occurred, or an error occurred processing your request",
    ),
    401: (AuthenticationError, "API key is missing or invalid"),
    403: (
        WalletNotOpenError,
        "This operation requires a wallet to be open and one has not been opened",
    ),
    404: (NotFoundError, "The item requested does not exist"),
    500: (ServerError, "An exception was thrown while processing the request"),
}


def classify_error(status_code: int, error_message: str = "") -> WalletAPIError:
    """Map an HTTP status code and optional server detail to a typed error.

    Every status code yields an error; codes without a dedicated type produce
    a plain :class:`WalletAPIError`.
    """
    error_class, text = _STATUS_ERRORS.get(
        status_code, (WalletAPIError, f"Unexpected HTTP status {status_code}")
    )
    message = f"{text}: {error_message}" if error_message else text
    return error_class(message, status_code=status_code, error_message=error_message)
