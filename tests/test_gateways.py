"""
Unit tests for the simulated gateways in payflow/processors/.
"""
import pytest
from decimal import Decimal

from payflow.errors import GatewayFailure
from payflow.processors.card import PayPalGateway, StripeGateway
from payflow.processors.manual import ManualLedgerGateway
from payflow.processors.mobile_money import SafaricomGateway, TelebirrGateway


class TestSimulatedGateways:
    async def test_stripe_reports_minor_units(self):
        resp = await StripeGateway(latency_max=0, error_rate=0).charge(
            Decimal("12.34"), "ETB", "credit_card", {"card_last4": "4242"})
        assert resp["gateway_transaction_id"].startswith("pi_")
        assert resp["amount_received"] == 1234
        assert resp["card_last4"] == "4242"

    async def test_paypal(self):
        resp = await PayPalGateway(latency_max=0, error_rate=0).charge(
            Decimal("10.00"), "USD", "paypal", {})
        assert resp["status"] == "COMPLETED"
        assert resp["gateway_transaction_id"].startswith("PAYID_")

    async def test_mobile_money_requires_phone(self):
        with pytest.raises(GatewayFailure, match="phone") as exc_info:
            await TelebirrGateway(latency_max=0, error_rate=0).charge(
                Decimal("10"), "ETB", "telebirr", {})
        assert exc_info.value.gateway == "telebirr"

    async def test_mpesa_response(self):
        resp = await SafaricomGateway(latency_max=0, error_rate=0).charge(
            Decimal("10"), "KES", "mpesa", {"phone_number": "+254700000000"})
        assert resp["ResultCode"] == 0
        assert resp["gateway_transaction_id"] == resp["MpesaReceiptNumber"]

    async def test_manual_ledger(self):
        resp = await ManualLedgerGateway(latency_max=0, error_rate=0).charge(
            Decimal("500"), "ETB", "cash", {})
        assert resp["method"] == "cash"
        assert resp["gateway_transaction_id"].startswith("LEDGER_")

    async def test_error_rate_one_always_fails(self):
        with pytest.raises(GatewayFailure, match="503"):
            await StripeGateway(latency_max=0, error_rate=1.0).charge(
                Decimal("10"), "ETB", "credit_card", {})
