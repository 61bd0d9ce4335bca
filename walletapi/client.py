"""Async HTTP client for the wallet API service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Sequence, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from walletapi import units
from walletapi.config import (
    DEFAULT_DAEMON_HOST,
    DEFAULT_DAEMON_PORT,
    DEFAULT_DECIMAL_DIVISOR,
    DEFAULT_FEE,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    ClientConfig,
)
from walletapi.errors import (
    ConfigurationError,
    InputError,
    ResponseFormatError,
    TransportError,
    WalletAPIError,
)
from walletapi.models import (
    Balance,
    ImportAddressRequest,
    ImportKeyRequest,
    ImportSeedRequest,
    ImportViewAddressRequest,
    ImportViewOnlyRequest,
    NodeInfo,
    ResetRequest,
    SendAdvancedRequest,
    SendBasicRequest,
    SendFusionAdvancedRequest,
    SetNodeRequest,
    StatusInfo,
    TransactionInfo,
    TransferDestination,
    ValidateAddressRequest,
    ValidationInfo,
    WalletKeys,
    WalletOpenRequest,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _segment(value: Any) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(str(value), safe="")


def _build(model: type[M], **fields: Any) -> M:
    try:
        return model(**fields)
    except ValidationError as e:
        raise InputError(f"Invalid {model.__name__}: {e}") from e


def _parse(model: type[M], data: Any) -> M:
    """Validate a response body against ``model``."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(f"Unexpected {model.__name__} response: {e}") from e


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ResponseFormatError(f"Response is missing '{key}'")
    return data[key]


def _list(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise ResponseFormatError("Response is not a list")
    return data


class WalletAPIClient:
    """Async client for the wallet API REST interface.

    Usage:
        async with WalletAPIClient("my-api-key", port=8070) as wallet:
            await wallet.open_wallet("mywallet.wallet", "hunter2")
            balance = await wallet.balance()
            print(balance.unlocked, balance.locked)

    Amounts returned by the service are converted to display units
    (``Decimal``) using the configured decimal divisor; amounts sent to the
    service are converted back to atomic units.

    An injected ``http_client`` keeps its own ``base_url``, so ``host``,
    ``port`` and ``use_tls`` only apply to the client created here. The
    configured timeout is applied to every request either way.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        use_tls: bool = False,
        default_mixin: Optional[int] = None,
        default_fee: Union[Decimal, float, str] = DEFAULT_FEE,
        decimal_divisor: int = DEFAULT_DECIMAL_DIVISOR,
        default_unlock_time: int = 0,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        try:
            config = ClientConfig(
                host=host,
                port=port,
                timeout_ms=timeout_ms,
                use_tls=use_tls,
                api_key=api_key,
                default_mixin=default_mixin,
                default_fee=default_fee,
                decimal_divisor=decimal_divisor,
                default_unlock_time=default_unlock_time,
                user_agent=user_agent,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "WalletAPIClient":
        """Create a client from an already validated :class:`ClientConfig`."""
        return cls(**config.model_dump(), http_client=http_client)

    def _build_headers(self) -> dict[str, str]:
        return {
            "X-API-KEY": self._config.api_key,
            "User-Agent": self._config.user_agent,
        }

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def __aenter__(self) -> "WalletAPIClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._owns_client:
            await self._client.aclose()

    # -----------------------------------------------------------------
    # Unit conversion
    # -----------------------------------------------------------------

    def to_atomic_units(self, amount: units.Amount) -> int:
        """Convert a display amount to atomic units using the configured divisor."""
        return units.to_atomic_units(amount, self._config.decimal_divisor)

    def from_atomic_units(self, amount: units.Amount) -> Decimal:
        """Convert an atomic amount to display units using the configured divisor."""
        return units.from_atomic_units(amount, self._config.decimal_divisor)

    def new_destination(
        self, address: str, amount: units.Amount
    ) -> TransferDestination:
        """Build a transfer destination from a display amount."""
        return TransferDestination(address=address, amount=self.to_atomic_units(amount))

    def _balance(self, data: Any) -> Balance:
        unlocked = self.from_atomic_units(_field(data, "unlocked"))
        locked = self.from_atomic_units(_field(data, "locked"))
        return _parse(Balance, {**data, "unlocked": unlocked, "locked": locked})

    def _transaction(self, data: Any) -> TransactionInfo:
        fee = self.from_atomic_units(_field(data, "fee"))
        transfers = data.get("transfers") or []
        if not isinstance(transfers, list):
            raise ResponseFormatError("Transaction transfers is not a list")
        converted = [self._transfer(transfer) for transfer in transfers]
        return _parse(TransactionInfo, {**data, "fee": fee, "transfers": converted})

    def _transfer(self, data: Any) -> dict[str, Any]:
        amount = self.from_atomic_units(_field(data, "amount"))
        return {**data, "amount": amount}

    def _transactions(self, data: Any) -> list[TransactionInfo]:
        return [self._transaction(tx) for tx in _list(_field(data, "transactions"))]

    # -----------------------------------------------------------------
    # Internal HTTP helpers
    # -----------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Make a single HTTP request and return the decoded JSON body."""
        if not path:
            raise InputError("Must supply a path")

        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(
                method,
                path,
                json=json_body,
                headers=self._build_headers(),
                timeout=self._config.timeout,
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(str(e) or type(e).__name__) from e

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = None
            error = WalletAPIError.from_response(
                response.status_code, body, response.text
            )
            logger.warning(
                "%s %s returned %d: %s", method, path, response.status_code, error.message
            )
            raise error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s %s returned a non-JSON body", method, path)
            raise ResponseFormatError(
                "Response body is not valid JSON",
                status_code=response.status_code,
                error_message=response.text.strip(),
            ) from e

    async def _get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def _post(self, path: str, payload: Optional[BaseModel] = None) -> Any:
        return await self._request("POST", path, json_body=self._dump(payload))

    async def _put(self, path: str, payload: Optional[BaseModel] = None) -> Any:
        return await self._request("PUT", path, json_body=self._dump(payload))

    async def _delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    @staticmethod
    def _dump(payload: Optional[BaseModel]) -> Optional[dict[str, Any]]:
        if payload is None:
            return None
        return payload.model_dump(mode="json", exclude_none=True, by_alias=True)

    # -----------------------------------------------------------------
    # Wallet container API
    # -----------------------------------------------------------------

    async def open_wallet(
        self,
        filename: str,
        password: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """POST /wallet/open -- Open an existing wallet container."""
        self._require_container(filename, password)
        request = _build(
            WalletOpenRequest, filename=filename, password=password,
            **self._daemon_fields(host, port, ssl),
        )
        await self._post("/wallet/open", request)

    async def create_wallet(
        self,
        filename: str,
        password: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """POST /wallet/create -- Create a new wallet container."""
        self._require_container(filename, password)
        request = _build(
            WalletOpenRequest, filename=filename, password=password,
            **self._daemon_fields(host, port, ssl),
        )
        await self._post("/wallet/create", request)

    async def import_key(
        self,
        filename: str,
        password: str,
        private_view_key: str,
        private_spend_key: str,
        scan_height: int = 0,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """POST /wallet/import/key -- Import a wallet container from its private keys."""
        self._require_container(filename, password)
        if not private_view_key:
            raise InputError("Must supply private view key")
        if not private_spend_key:
            raise InputError("Must supply private spend key")
        request = _build(
            ImportKeyRequest,
            filename=filename,
            password=password,
            scan_height=scan_height,
            private_view_key=private_view_key,
            private_spend_key=private_spend_key,
            **self._daemon_fields(host, port, ssl),
        )
        await self._post("/wallet/import/key", request)

    async def import_seed(
        self,
        filename: str,
        password: str,
        mnemonic_seed: str,
        scan_height: int = 0,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """POST /wallet/import/seed -- Import a wallet container from a mnemonic seed."""
        self._require_container(filename, password)
        if not mnemonic_seed:
            raise InputError("Must supply mnemonic seed phrase")
        request = _build(
            ImportSeedRequest,
            filename=filename,
            password=password,
            scan_height=scan_height,
            mnemonic_seed=mnemonic_seed,
            **self._daemon_fields(host, port, ssl),
        )
        await self._post("/wallet/import/seed", request)

    async def import_view_only(
        self,
        filename: str,
        password: str,
        private_view_key: str,
        address: str,
        scan_height: int = 0,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """POST /wallet/import/view -- Import a view-only wallet container.

        The resulting container can see incoming funds but cannot spend them.
        """
        self._require_container(filename, password)
        if not private_view_key:
            raise InputError("Must supply private view key")
        if not address:
            raise InputError("Must supply wallet address")
        request = _build(
            ImportViewOnlyRequest,
            filename=filename,
            password=password,
            scan_height=scan_height,
            private_view_key=private_view_key,
            address=address,
            **self._daemon_fields(host, port, ssl),
        )
        await self._post("/wallet/import/view", request)

    async def close_wallet(self) -> None:
        """DELETE /wallet -- Close the wallet container that is currently open."""
        await self._delete("/wallet")

    async def save_wallet(self) -> None:
        """PUT /save -- Save the open wallet container to disk."""
        await self._put("/save")

    async def reset_wallet(self, scan_height: int = 0) -> None:
        """PUT /reset -- Reset and save the wallet, rescanning from ``scan_height``."""
        await self._put("/reset", _build(ResetRequest, scan_height=scan_height))

    @staticmethod
    def _require_container(filename: str, password: str) -> None:
        if not filename:
            raise InputError("Must supply wallet filename")
        if not password:
            raise InputError("Must supply wallet password")

    @staticmethod
    def _daemon_fields(
        host: Optional[str], port: Optional[int], ssl: Optional[bool]
    ) -> dict[str, Any]:
        return {
            "daemon_host": host if host else DEFAULT_DAEMON_HOST,
            "daemon_port": port if port is not None else DEFAULT_DAEMON_PORT,
            "daemon_ssl": bool(ssl),
        }

    # -----------------------------------------------------------------
    # Node API
    # -----------------------------------------------------------------

    async def get_node(self) -> NodeInfo:
        """GET /node -- Get the node the wallet syncs from, and its fee."""
        data = await self._get("/node")
        return _parse(NodeInfo, data)

    async def set_node(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        ssl: Optional[bool] = None,
    ) -> None:
        """PUT /node -- Change the node used for syncing.

        At least one of ``host`` or ``port`` is required. Arguments left as
        None are not sent.
        """
        if not host and port is None:
            raise InputError("Must specify at minimum a host or port parameter")
        request = _build(
            SetNodeRequest,
            daemon_host=host or None,
            daemon_port=port,
            daemon_ssl=ssl,
        )
        await self._put("/node", request)

    async def status(self) -> StatusInfo:
        """GET /status -- Get sync status, peer count and hashrate."""
        data = await self._get("/status")
        return _parse(StatusInfo, data)

    # -----------------------------------------------------------------
    # Address API
    # -----------------------------------------------------------------

    async def list_addresses(self) -> list[str]:
        """GET /addresses -- List all addresses in the wallet container."""
        data = await self._get("/addresses")
        return list(_list(_field(data, "addresses")))

    async def primary_address(self) -> str:
        """GET /addresses/primary -- Get the primary address of the container."""
        data = await self._get("/addresses/primary")
        return _field(data, "address")

    async def create_address(self) -> WalletKeys:
        """POST /addresses/create -- Create a new random address in the container."""
        data = await self._post("/addresses/create")
        return _parse(WalletKeys, data)

    async def create_integrated_address(self, address: str, payment_id: str) -> str:
        """GET /addresses/:address/:paymentId -- Build an integrated address."""
        if not address:
            raise InputError("Must supply wallet address")
        if not payment_id:
            raise InputError("Must supply payment ID")
        data = await self._get(f"/addresses/{_segment(address)}/{_segment(payment_id)}")
        return _field(data, "integratedAddress")

    async def delete_address(self, address: str) -> None:
        """DELETE /addresses/:address -- Remove a subwallet from the container."""
        if not address:
            raise InputError("Must supply wallet address")
        await self._delete(f"/addresses/{_segment(address)}")

    async def import_address(self, private_spend_key: str, scan_height: int = 0) -> str:
        """POST /addresses/import -- Import a subwallet by private spend key.

        Returns:
            The address of the imported subwallet.
        """
        if not private_spend_key:
            raise InputError("Must supply private spend key")
        request = _build(
            ImportAddressRequest,
            private_spend_key=private_spend_key,
            scan_height=scan_height,
        )
        data = await self._post("/addresses/import", request)
        return _field(data, "address")

    async def import_view_address(self, public_spend_key: str, scan_height: int = 0) -> str:
        """POST /addresses/import/view -- Import a view-only subwallet.

        Returns:
            The address of the imported subwallet.
        """
        if not public_spend_key:
            raise InputError("Must supply public spend key")
        request = _build(
            ImportViewAddressRequest,
            public_spend_key=public_spend_key,
            scan_height=scan_height,
        )
        data = await self._post("/addresses/import/view", request)
        return _field(data, "address")

    async def validate_address(self, address: str) -> ValidationInfo:
        """POST /addresses/validate -- Validate an address and decode its keys."""
        data = await self._post(
            "/addresses/validate", _build(ValidateAddressRequest, address=address)
        )
        return _parse(ValidationInfo, data)

    # -----------------------------------------------------------------
    # Balance API
    # -----------------------------------------------------------------

    async def balance(self, address: Optional[str] = None) -> Balance:
        """GET /balance[/:address] -- Balance of the container or of one address."""
        path = f"/balance/{_segment(address)}" if address else "/balance"
        data = await self._get(path)
        return self._balance(data)

    async def all_balances(self) -> list[Balance]:
        """GET /balances -- Balance of every address in the container."""
        data = await self._get("/balances")
        return [self._balance(entry) for entry in _list(data)]

    # -----------------------------------------------------------------
    # Keys API
    # -----------------------------------------------------------------

    async def keys(self, address: Optional[str] = None) -> Union[str, WalletKeys]:
        """GET /keys[/:address] -- Get wallet keys.

        Without an address this returns the container's shared private view
        key. With an address it returns the spend keys of that address.
        """
        path = f"/keys/{_segment(address)}" if address else "/keys"
        data = await self._get(path)
        if isinstance(data, dict) and data.get("privateViewKey"):
            return data["privateViewKey"]
        return _parse(WalletKeys, data)

    async def keys_mnemonic(self, address: str) -> str:
        """GET /keys/mnemonic/:address -- Get the mnemonic seed of an address."""
        if not address:
            raise InputError("Must supply a wallet address")
        data = await self._get(f"/keys/mnemonic/{_segment(address)}")
        return _field(data, "mnemonicSeed")

    # -----------------------------------------------------------------
    # Transaction API
    # -----------------------------------------------------------------

    async def transactions(
        self,
        start_height: Optional[int] = None,
        end_height: Optional[int] = None,
    ) -> list[TransactionInfo]:
        """GET /transactions[/:start[/:end]] -- List transactions in the container.

        ``end_height`` is only used together with ``start_height``.
        """
        path = "/transactions"
        if start_height is not None:
            path += f"/{_segment(start_height)}"
            if end_height is not None:
                path += f"/{_segment(end_height)}"
        data = await self._get(path)
        return self._transactions(data)

    async def transactions_by_address(
        self,
        address: str,
        start_height: int,
        end_height: Optional[int] = None,
    ) -> list[TransactionInfo]:
        """GET /transactions/address/:address/:start[/:end] -- Transactions of one address."""
        if not address:
            raise InputError("Must supply wallet address")
        if start_height is None:
            raise InputError("Must supply start height")
        path = f"/transactions/address/{_segment(address)}/{_segment(start_height)}"
        if end_height is not None:
            path += f"/{_segment(end_height)}"
        data = await self._get(path)
        return self._transactions(data)

    async def unconfirmed_transactions(
        self, address: Optional[str] = None
    ) -> list[TransactionInfo]:
        """GET /transactions/unconfirmed[/:address] -- Outgoing, unconfirmed transactions."""
        path = "/transactions/unconfirmed"
        if address:
            path += f"/{_segment(address)}"
        data = await self._get(path)
        return self._transactions(data)

    async def transaction_by_hash(self, tx_hash: str) -> TransactionInfo:
        """GET /transactions/hash/:hash -- Details of a single transaction."""
        if not tx_hash:
            raise InputError("Must supply transaction hash")
        data = await self._get(f"/transactions/hash/{_segment(tx_hash)}")
        return self._transaction(_field(data, "transaction"))

    async def transaction_private_key(self, tx_hash: str) -> str:
        """GET /transactions/privatekey/:hash -- Private key of a sent transaction.

        The key can be handed to a third party to audit the transaction.
        """
        if not tx_hash:
            raise InputError("Must supply transaction hash")
        data = await self._get(f"/transactions/privatekey/{_segment(tx_hash)}")
        return _field(data, "transactionPrivateKey")

    async def send_basic(
        self,
        address: str,
        amount: Optional[units.Amount],
        payment_id: Optional[str] = None,
    ) -> str:
        """POST /transactions/send/basic -- Send funds to a single address.

        Args:
            address: Recipient address.
            amount: Amount in display units.
            payment_id: Optional payment ID.

        Returns:
            The transaction hash. The transaction may not yet be confirmed.
        """
        if not address:
            raise InputError("Must supply wallet address")
        if amount is None:
            raise InputError("Must supply amount")
        request = _build(
            SendBasicRequest,
            destination=address,
            amount=self.to_atomic_units(amount),
            payment_id=payment_id or None,
        )
        data = await self._post("/transactions/send/basic", request)
        return _field(data, "transactionHash")

    async def send_advanced(
        self,
        destinations: Sequence[Union[TransferDestination, Mapping[str, Any]]],
        mixin: Optional[int] = None,
        fee: Optional[units.Amount] = None,
        source_addresses: Optional[Sequence[str]] = None,
        payment_id: Optional[str] = None,
        change_address: Optional[str] = None,
        unlock_time: Optional[int] = None,
    ) -> str:
        """POST /transactions/send/advanced -- Send funds with full control.

        Args:
            destinations: Recipients, with amounts in atomic units
                (see :meth:`new_destination`).
            mixin: Number of decoy inputs; defaults to the configured mixin.
            fee: Fee in display units; defaults to the configured fee.
            source_addresses: Addresses to take funds from.
            payment_id: Optional payment ID.
            change_address: Address receiving the change.
            unlock_time: Unlock time; defaults to the configured unlock time.

        Returns:
            The transaction hash. The transaction may not yet be confirmed.
        """
        if not isinstance(destinations, (list, tuple)):
            raise InputError("Must supply an array of destinations")
        checked = [self._destination(entry) for entry in destinations]
        if source_addresses is not None and not isinstance(source_addresses, (list, tuple)):
            raise InputError("Must supply an array of source wallet addresses")

        request = _build(
            SendAdvancedRequest,
            destinations=checked,
            mixin=mixin if mixin is not None else self._config.default_mixin,
            fee=self.to_atomic_units(fee if fee is not None else self._config.default_fee),
            source_addresses=list(source_addresses) if source_addresses else None,
            payment_id=payment_id or None,
            change_address=change_address or None,
            unlock_time=(
                unlock_time if unlock_time is not None else self._config.default_unlock_time
            ),
        )
        data = await self._post("/transactions/send/advanced", request)
        return _field(data, "transactionHash")

    @staticmethod
    def _destination(
        entry: Union[TransferDestination, Mapping[str, Any]],
    ) -> TransferDestination:
        if isinstance(entry, TransferDestination):
            return entry
        if not isinstance(entry, Mapping) or not entry.get("address"):
            raise InputError("Must supply a wallet address in destination object")
        if entry.get("amount") is None:
            raise InputError("Must supply an amount in destination object")
        return _build(TransferDestination, address=entry["address"], amount=entry["amount"])

    async def send_fusion_basic(self) -> str:
        """POST /transactions/send/fusion/basic -- Optimize the wallet with a fusion transaction."""
        data = await self._post("/transactions/send/fusion/basic")
        return _field(data, "transactionHash")

    async def send_fusion_advanced(
        self,
        address: str,
        mixin: Optional[int] = None,
        source_addresses: Optional[Sequence[str]] = None,
    ) -> str:
        """POST /transactions/send/fusion/advanced -- Fusion transaction with options.

        Args:
            address: Destination of the fused outputs.
            mixin: Number of decoy inputs; defaults to the configured mixin.
            source_addresses: Addresses whose outputs are fused.
        """
        if not address:
            raise InputError("Must supply a wallet address")
        if source_addresses is not None and not isinstance(source_addresses, (list, tuple)):
            raise InputError("Must supply an array of source wallet addresses")
        request = _build(
            SendFusionAdvancedRequest,
            destination=address,
            mixin=mixin if mixin is not None else self._config.default_mixin,
            source_addresses=list(source_addresses) if source_addresses else None,
        )
        data = await self._post("/transactions/send/fusion/advanced", request)
        return _field(data, "transactionHash")
