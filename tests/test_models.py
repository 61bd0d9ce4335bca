"""Pydantic model validation tests for the wallet API client."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from walletapi.config import ClientConfig
from walletapi.models import (
    Balance,
    ImportKeyRequest,
    SendAdvancedRequest,
    SetNodeRequest,
    StatusInfo,
    TransactionInfo,
    TransferDestination,
    ValidationInfo,
)

from tests.conftest import ADDRESS, TX_HASH


class TestClientConfig:
    def test_frozen(self):
        config = ClientConfig(api_key="key")
        with pytest.raises(ValidationError):
            config.port = 1

    def test_requires_api_key(self):
        with pytest.raises(ValidationError):
            ClientConfig()
        with pytest.raises(ValidationError):
            ClientConfig(api_key="")

    def test_timeout_seconds(self):
        assert ClientConfig(api_key="key", timeout_ms=1500).timeout == 1.5


class TestTransactionInfo:
    def test_from_camel_case_json(self):
        data = {
            "hash": TX_HASH,
            "fee": Decimal("0.1"),
            "blockHeight": 12,
            "timestamp": 1550000000,
            "paymentID": "",
            "unlockTime": 0,
            "isCoinbaseTransaction": True,
            "transfers": [{"address": ADDRESS, "amount": Decimal("1.5")}],
        }
        model = TransactionInfo.model_validate(data)
        assert model.hash == TX_HASH
        assert model.block_height == 12
        assert model.is_coinbase_transaction is True
        assert model.transfers[0].amount == Decimal("1.5")

    def test_unconfirmed_without_height(self):
        model = TransactionInfo.model_validate({"hash": TX_HASH, "fee": 0})
        assert model.block_height is None
        assert model.transfers == []


class TestStatusAndValidation:
    def test_status(self):
        model = StatusInfo.model_validate(
            {
                "walletBlockCount": 1,
                "localDaemonBlockCount": 2,
                "networkBlockCount": 3,
                "peerCount": 4,
                "hashrate": 5,
                "isViewWallet": True,
                "subWalletCount": 6,
            }
        )
        assert model.is_view_wallet is True
        assert model.local_daemon_block_count == 2

    def test_validation_info_integrated(self):
        model = ValidationInfo.model_validate(
            {
                "isIntegrated": True,
                "paymentID": "abcd",
                "actualAddress": ADDRESS,
                "publicSpendKey": "ps",
                "publicViewKey": "pv",
            }
        )
        assert model.is_integrated is True
        assert model.payment_id == "abcd"

    def test_balance_missing_field(self):
        with pytest.raises(ValidationError):
            Balance.model_validate({"unlocked": 1})


class TestRequestSerialization:
    def test_omits_none_fields(self):
        request = SetNodeRequest(daemon_port=11898)
        assert request.model_dump(exclude_none=True, by_alias=True) == {"daemonPort": 11898}

    def test_import_key_aliases(self):
        request = ImportKeyRequest(
            filename="f",
            password="p",
            private_view_key="v",
            private_spend_key="s",
        )
        assert request.model_dump(exclude_none=True, by_alias=True) == {
            "filename": "f",
            "password": "p",
            "scanHeight": 0,
            "privateViewKey": "v",
            "privateSpendKey": "s",
        }

    def test_send_advanced_nested_destinations(self):
        request = SendAdvancedRequest(
            destinations=[TransferDestination(address=ADDRESS, amount=5)],
            fee=10,
            payment_id="pid",
        )
        assert request.model_dump(exclude_none=True, by_alias=True) == {
            "destinations": [{"address": ADDRESS, "amount": 5}],
            "fee": 10,
            "paymentID": "pid",
            "unlockTime": 0,
        }
