"""
Unit tests for payflow/services/catalog.py.
"""
from decimal import Decimal

from payflow.schemas.settings import PaymentSettings
from payflow.services.catalog import enabled_methods, list_methods


def by_type(methods):
    return {m.type: m for m in methods}


class TestListMethods:
    def test_fixed_table_order(self):
        types = [m.type for m in list_methods(PaymentSettings())]
        assert types == [
            "credit_card", "debit_card", "telebirr", "cbebe", "mpesa",
            "airtel_money", "bank_transfer", "paypal", "cash",
        ]

    def test_enabled_follows_settings(self):
        methods = by_type(list_methods(PaymentSettings(enabled_methods=["cash", "paypal"])))
        assert methods["cash"].enabled is True
        assert methods["paypal"].enabled is True
        assert methods["credit_card"].enabled is False

    def test_caps_and_verification_flags(self):
        methods = by_type(list_methods(PaymentSettings()))

        assert methods["credit_card"].config.auto_approve is True
        assert methods["credit_card"].config.max_amount == Decimal(50000)
        assert methods["debit_card"].config.max_amount == Decimal(30000)

        bank = methods["bank_transfer"].config
        assert bank.requires_manual_verification is True
        assert bank.auto_approve is False
        assert bank.max_amount == Decimal(1000000)
        assert bank.bank_config.bank_name == "Commercial Bank of Ethiopia"

        cash = methods["cash"].config
        assert cash.requires_manual_verification is True
        assert cash.max_amount == Decimal(50000)
        assert cash.bank_config is None

    def test_telebirr_follows_processing_mode(self):
        auto = by_type(list_methods(PaymentSettings(processing_mode="automatic")))["telebirr"]
        manual = by_type(list_methods(PaymentSettings(processing_mode="manual")))["telebirr"]
        hybrid = by_type(list_methods(PaymentSettings(processing_mode="hybrid")))["telebirr"]

        assert (auto.config.auto_approve, auto.config.requires_manual_verification) == (True, False)
        assert (manual.config.auto_approve, manual.config.requires_manual_verification) == (False, True)
        assert (hybrid.config.auto_approve, hybrid.config.requires_manual_verification) == (False, False)


class TestEnabledMethods:
    def test_default_settings(self):
        types = [m.type for m in enabled_methods(PaymentSettings())]
        # table order, not settings order
        assert types == ["credit_card", "telebirr", "bank_transfer"]

    def test_unlisted_types_never_appear(self):
        # mobile_money is enabled by default but has no catalog entry
        assert "mobile_money" not in [m.type for m in enabled_methods(PaymentSettings())]
