"""Shared fixtures for wallet API client tests."""

import json

import httpx

from walletapi.client import WalletAPIClient

API_KEY = "test-api-key"
ADDRESS = "TRTLv2Fyavy8CXG8BPEbNeCHFZ1fuDCYCZ3vW5H5LXN4K2M2MHUpTENip9bbavpHvvPwb4NDkBWrNgURAd5DB38FHXWZyoBh4wW"
ADDRESS_2 = "TRTLuxH78akDMCsXycnU5HjJE6zPCgM4KRNNQSboqh1yiTnvxuhNVUL9tK92j9kurSKdXVHFmjSRkaNBxM6Nb3G8eQGL7aj113A"
TX_HASH = "396e2a782c9ce9993982c6f93e305b05306d0e5794f57157fbac78581443c55f"
PAYMENT_ID = "1DE6FD8A2E6A2AAB5D9B7B2F9B6F84D0DFA6B1D3B8B3F2B7C8A6C7E8F9D0E1F2"


def transaction(tx_hash: str = TX_HASH, fee: int = 10, amounts=(150000000,)) -> dict:
    """Raw transaction as returned by the service (atomic amounts)."""
    return {
        "hash": tx_hash,
        "fee": fee,
        "blockHeight": 1000,
        "timestamp": 1550000000,
        "paymentID": "",
        "unlockTime": 0,
        "isCoinbaseTransaction": False,
        "transfers": [{"address": ADDRESS, "amount": amount} for amount in amounts],
    }


def make_handler(responses: dict[tuple[str, str], tuple[int, object]], calls=None):
    """Create a mock handler from a route -> response mapping.

    Every request is appended to ``calls`` (when given) as
    ``(method, raw_path, json_body_or_None, headers)``.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode()
        if calls is not None:
            body = json.loads(request.content) if request.content else None
            calls.append((request.method, path, body, request.headers))
        key = (request.method, path)
        if key in responses:
            status, body = responses[key]
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)
        return httpx.Response(404, json={"errorMessage": "Not found"})

    return handler


def make_client(handler, **kwargs) -> WalletAPIClient:
    """Create a WalletAPIClient with MockTransport."""
    transport = httpx.MockTransport(handler)
    http_client = httpx.AsyncClient(transport=transport, base_url="http://test")
    return WalletAPIClient(API_KEY, http_client=http_client, **kwargs)
