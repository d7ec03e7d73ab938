"""Tests for ReportingConfig validation and keyword matching."""

import pytest

from books_modules.reporting.config import ReportingConfig


class TestReportingConfig:

    def test_defaults(self):
        config = ReportingConfig.with_defaults()
        assert config.default_currency == "INR"
        assert "Cash-in-hand" in config.asset_group_keywords
        assert config.include_zero_balances is True

    def test_from_dict_converts_lists(self):
        config = ReportingConfig.from_dict({
            "asset_group_keywords": ["Assets", "Stock"],
            "csv_delimiter": ";",
        })
        assert config.asset_group_keywords == ("Assets", "Stock")
        assert config.csv_delimiter == ";"

    def test_unknown_key_is_rejected(self):
        with pytest.raises(TypeError):
            ReportingConfig.from_dict({"no_such_option": True})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"asset_group_keywords": ()},
            {"csv_delimiter": ""},
            {"csv_delimiter": "||"},
            {"default_currency": ""},
            {"asset_group_keywords": "Assets"},
            {"equity_keywords": "capital"},
            {"asset_group_keywords": ("Assets", "")},
            {"long_term_liability_keywords": ("loan", "   ")},
            {"fixed_asset_keywords": ("fixed", 5)},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            ReportingConfig(**overrides)

    def test_asset_match_is_case_sensitive(self):
        config = ReportingConfig()
        assert config.is_asset_group("Current Assets")
        assert not config.is_asset_group("current assets")

    def test_mentions_is_case_insensitive(self):
        assert ReportingConfig.mentions("Secured LOANS", ("loan",))
        assert not ReportingConfig.mentions("Sundry Creditors", ("loan",))

    def test_blank_keyword_would_otherwise_match_every_group(self):
        with pytest.raises(ValueError, match="asset_group_keywords"):
            ReportingConfig(asset_group_keywords=("",))
