"""
Tests for core.config — Boot-time platform parameters.
"""

import pytest

from core.config.rules import (
    DEFAULT_BLOCK_INTERVAL_SECONDS,
    DEFAULT_MIN_TICKET_PRICE,
    DEFAULT_PLATFORM_FEE_PERCENT,
    TicketingConfig,
)


# ── TicketingConfig ──────────────────────────────────────────

class TestTicketingConfig:
    def test_defaults(self):
        config = TicketingConfig(admin_identity="admin")
        assert config.min_ticket_price == DEFAULT_MIN_TICKET_PRICE == 1_000_000
        assert config.platform_fee_percent == DEFAULT_PLATFORM_FEE_PERCENT == 5
        assert config.block_interval_seconds == DEFAULT_BLOCK_INTERVAL_SECONDS == 600
        assert config.genesis_balance == 0

    def test_admin_required(self):
        with pytest.raises(ValueError, match="admin_identity"):
            TicketingConfig(admin_identity="")

    def test_fee_bounds(self):
        TicketingConfig(admin_identity="admin", platform_fee_percent=0)
        TicketingConfig(admin_identity="admin", platform_fee_percent=100)
        with pytest.raises(ValueError, match="between 0 and 100"):
            TicketingConfig(admin_identity="admin", platform_fee_percent=101)

    def test_min_price_positive(self):
        with pytest.raises(ValueError, match="positive"):
            TicketingConfig(admin_identity="admin", min_ticket_price=0)

    def test_rejects_bool_numbers(self):
        with pytest.raises(TypeError):
            TicketingConfig(admin_identity="admin", platform_fee_percent=True)

    def test_frozen_immutability(self):
        config = TicketingConfig(admin_identity="admin")
        with pytest.raises(AttributeError):
            config.admin_identity = "mallory"


class TestFromMapping:
    def test_string_values_from_environment(self):
        config = TicketingConfig.from_mapping({
            "ADMIN_IDENTITY": "admin",
            "MIN_TICKET_PRICE": "2000",
            "PLATFORM_FEE_PERCENT": "7",
            "BLOCK_INTERVAL_SECONDS": "30",
            "GENESIS_BALANCE": "500",
        })
        assert config == TicketingConfig(
            admin_identity="admin",
            min_ticket_price=2000,
            platform_fee_percent=7,
            block_interval_seconds=30,
            genesis_balance=500,
        )

    def test_missing_keys_use_defaults(self):
        config = TicketingConfig.from_mapping({"ADMIN_IDENTITY": "admin"})
        assert config.min_ticket_price == DEFAULT_MIN_TICKET_PRICE

    def test_admin_identity_required(self):
        with pytest.raises(ValueError, match="ADMIN_IDENTITY"):
            TicketingConfig.from_mapping({})

    def test_non_numeric_value(self):
        with pytest.raises(ValueError, match="PLATFORM_FEE_PERCENT"):
            TicketingConfig.from_mapping({
                "ADMIN_IDENTITY": "admin",
                "PLATFORM_FEE_PERCENT": "five",
            })
