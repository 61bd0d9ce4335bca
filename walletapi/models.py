"""Pydantic v2 models for wallet API request/response data."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Address and key models
# ---------------------------------------------------------------------------


class WalletKeys(BaseModel):
    address: Optional[str] = None
    private_spend_key: Optional[str] = Field(default=None, alias="privateSpendKey")
    public_spend_key: Optional[str] = Field(default=None, alias="publicSpendKey")

    model_config = {"populate_by_name": True}


class ValidationInfo(BaseModel):
    is_integrated: bool = Field(alias="isIntegrated")
    payment_id: Optional[str] = Field(default=None, alias="paymentID")
    actual_address: str = Field(alias="actualAddress")
    public_spend_key: str = Field(alias="publicSpendKey")
    public_view_key: str = Field(alias="publicViewKey")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Balance models
# ---------------------------------------------------------------------------


class Balance(BaseModel):
    """Balance of the whole container or of one address, in display units."""

    address: Optional[str] = None
    unlocked: Decimal
    locked: Decimal


# ---------------------------------------------------------------------------
# Node and status models
# ---------------------------------------------------------------------------


class NodeInfo(BaseModel):
    daemon_host: str = Field(alias="daemonHost")
    daemon_port: int = Field(alias="daemonPort")
    daemon_ssl: bool = Field(default=False, alias="daemonSSL")
    node_address: Optional[str] = Field(default=None, alias="nodeAddress")
    node_fee: Optional[int] = Field(default=None, alias="nodeFee")

    model_config = {"populate_by_name": True}


class StatusInfo(BaseModel):
    wallet_block_count: int = Field(alias="walletBlockCount")
    local_daemon_block_count: int = Field(alias="localDaemonBlockCount")
    network_block_count: int = Field(alias="networkBlockCount")
    peer_count: int = Field(alias="peerCount")
    hashrate: int
    is_view_wallet: bool = Field(alias="isViewWallet")
    sub_wallet_count: int = Field(alias="subWalletCount")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Transaction models
# ---------------------------------------------------------------------------


class TransferDestination(BaseModel):
    """Recipient of an outgoing transaction. ``amount`` is in atomic units."""

    address: str
    amount: int


class Transfer(BaseModel):
    """Transfer recorded in a transaction. ``amount`` is in display units."""

    address: str
    amount: Decimal


class TransactionInfo(BaseModel):
    hash: str
    fee: Decimal
    block_height: Optional[int] = Field(default=None, alias="blockHeight")
    timestamp: Optional[int] = None
    payment_id: Optional[str] = Field(default=None, alias="paymentID")
    unlock_time: int = Field(default=0, alias="unlockTime")
    is_coinbase_transaction: bool = Field(default=False, alias="isCoinbaseTransaction")
    transfers: list[Transfer] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Wallet container requests
# ---------------------------------------------------------------------------


class WalletOpenRequest(BaseModel):
    """Body shared by the open, create and import wallet endpoints."""

    daemon_host: Optional[str] = Field(default=None, alias="daemonHost")
    daemon_port: Optional[int] = Field(default=None, alias="daemonPort")
    daemon_ssl: Optional[bool] = Field(default=None, alias="daemonSSL")
    filename: str
    password: str

    model_config = {"populate_by_name": True}


class ImportKeyRequest(WalletOpenRequest):
    scan_height: int = Field(default=0, alias="scanHeight")
    private_view_key: str = Field(alias="privateViewKey")
    private_spend_key: str = Field(alias="privateSpendKey")


class ImportSeedRequest(WalletOpenRequest):
    scan_height: int = Field(default=0, alias="scanHeight")
    mnemonic_seed: str = Field(alias="mnemonicSeed")


class ImportViewOnlyRequest(WalletOpenRequest):
    scan_height: int = Field(default=0, alias="scanHeight")
    private_view_key: str = Field(alias="privateViewKey")
    address: str


class ResetRequest(BaseModel):
    scan_height: int = Field(default=0, alias="scanHeight")

    model_config = {"populate_by_name": True}


class SetNodeRequest(BaseModel):
    daemon_host: Optional[str] = Field(default=None, alias="daemonHost")
    daemon_port: Optional[int] = Field(default=None, alias="daemonPort")
    daemon_ssl: Optional[bool] = Field(default=None, alias="daemonSSL")

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Address requests
# ---------------------------------------------------------------------------


class ImportAddressRequest(BaseModel):
    private_spend_key: str = Field(alias="privateSpendKey")
    scan_height: int = Field(default=0, alias="scanHeight")

    model_config = {"populate_by_name": True}


class ImportViewAddressRequest(BaseModel):
    public_spend_key: str = Field(alias="publicSpendKey")
    scan_height: int = Field(default=0, alias="scanHeight")

    model_config = {"populate_by_name": True}


class ValidateAddressRequest(BaseModel):
    address: str


# ---------------------------------------------------------------------------
# Send requests
# ---------------------------------------------------------------------------


class SendBasicRequest(BaseModel):
    destination: str
    amount: int
    payment_id: Optional[str] = Field(default=None, alias="paymentID")

    model_config = {"populate_by_name": True}


class SendAdvancedRequest(BaseModel):
    destinations: list[TransferDestination]
    mixin: Optional[int] = None
    fee: int
    source_addresses: Optional[list[str]] = Field(default=None, alias="sourceAddresses")
    payment_id: Optional[str] = Field(default=None, alias="paymentID")
    change_address: Optional[str] = Field(default=None, alias="changeAddress")
    unlock_time: int = Field(default=0, alias="unlockTime")

    model_config = {"populate_by_name": True}


class SendFusionAdvancedRequest(BaseModel):
    destination: str
    mixin: Optional[int] = None
    source_addresses: Optional[list[str]] = Field(default=None, alias="sourceAddresses")

    model_config = {"populate_by_name": True}
