"""Tests for tax rule loading and validation.

Uses isolated directories via tmp_path and TAX_SHIELD_CONFIG_PATH
to avoid touching real settings.
"""

import json
from datetime import date

import pytest
import yaml
from pydantic import ValidationError

from taxshield.sdk.taxes import (
    TaxRulesNotFoundError,
    list_tax_years,
    load_tax_rules,
    parse_tax_rules,
)
from taxshield.sdk.taxes.rules import get_bundled_rules_dir


# === FIXTURES ===


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config directory with a custom rules directory."""
    config_dir = tmp_path / "config"
    rules_dir = tmp_path / "rules"

    config_dir.mkdir()
    rules_dir.mkdir()

    monkeypatch.setenv("TAX_SHIELD_CONFIG_PATH", str(config_dir))

    return {
        "config_dir": config_dir,
        "rules_dir": rules_dir,
    }


@pytest.fixture
def raw_2026():
    """Bundled 2026 table as a plain dict."""
    with open(get_bundled_rules_dir() / "2026.yaml") as f:
        return yaml.safe_load(f)


def use_rules_dir(env):
    settings = {"rules_dir": str(env["rules_dir"])}
    (env["config_dir"] / "settings.json").write_text(json.dumps(settings))


# === TESTS ===


class TestBundledRules:

    def test_load_2026(self, isolated_env):
        rules = load_tax_rules("2026")

        assert rules.year == 2026
        assert rules.social_security.wage_base == 184500
        assert rules.social_security.tax_rate == 0.124
        assert rules.medicare.tax_rate == 0.029
        assert rules.medicare.additional_rate == 0.009
        assert rules.self_employment.earnings_factor == 0.9235
        assert rules.self_employment.deduction_rate == 0.5
        assert rules.safe_harbor.high_income_threshold == 150000
        assert rules.safe_harbor.current_year_multiplier == 0.9
        assert rules.safe_harbor.underpayment_interest_rate == 0.08
        assert rules.safe_harbor.months_underpaid == 6
        assert rules.single.standard_deduction == 16100
        assert rules.married.standard_deduction == 32200
        assert rules.single.additional_medicare_threshold == 200000
        assert rules.married.additional_medicare_threshold == 250000

    def test_brackets_2026(self, isolated_env):
        rules = load_tax_rules("2026")

        single = rules.single.tax_brackets
        assert [b.rate for b in single] == [0.10, 0.12, 0.22, 0.24, 0.32, 0.35, 0.37]
        assert single[0].lower_bound == 0
        assert single[0].span == 12251
        assert single[-1].lower_bound == 644051
        assert single[-1].upper_bound is None
        assert single[-1].span == float("inf")

    def test_due_dates(self, isolated_env):
        rules = load_tax_rules("2026")

        assert [d.label for d in rules.payment_due_dates] == ["Q1", "Q2", "Q3", "Q4"]
        assert rules.payment_due_dates[0].due_date == date(2026, 4, 15)
        assert rules.payment_due_dates[-1].due_date == date(2027, 1, 15)

    def test_list_years(self, isolated_env):
        assert 2026 in list_tax_years()

    def test_missing_year(self, isolated_env):
        with pytest.raises(TaxRulesNotFoundError, match="1999"):
            load_tax_rules("1999")

    def test_missing_year_is_file_not_found(self, isolated_env):
        with pytest.raises(FileNotFoundError):
            load_tax_rules("1999")

    def test_unknown_filing_status(self, isolated_env):
        rules = load_tax_rules("2026")
        with pytest.raises(ValueError, match="Invalid filing status"):
            rules.for_status("mfs")


class TestCustomRulesDir:

    def test_custom_year(self, isolated_env, raw_2026):
        raw_2027 = dict(raw_2026, year=2027)
        raw_2027["social_security"] = {"wage_base": 190000, "tax_rate": 0.124}
        (isolated_env["rules_dir"] / "2027.yaml").write_text(yaml.safe_dump(raw_2027))
        use_rules_dir(isolated_env)

        rules = load_tax_rules("2027")

        assert rules.year == 2027
        assert rules.social_security.wage_base == 190000
        assert list_tax_years()[:2] == [2027, 2026]

    def test_custom_dir_overrides_bundled(self, isolated_env, raw_2026):
        raw_2026["safe_harbor"]["high_income_threshold"] = 75000
        (isolated_env["rules_dir"] / "2026.yaml").write_text(yaml.safe_dump(raw_2026))
        use_rules_dir(isolated_env)

        assert load_tax_rules("2026").safe_harbor.high_income_threshold == 75000

    def test_year_defaults_from_filename(self, isolated_env, raw_2026):
        del raw_2026["year"]
        (isolated_env["rules_dir"] / "2030.yaml").write_text(yaml.safe_dump(raw_2026))
        use_rules_dir(isolated_env)

        assert load_tax_rules("2030").year == 2030


class TestValidation:

    def test_gap_between_brackets(self, raw_2026):
        raw_2026["single"]["tax_brackets"][1]["lower_bound"] = 12300

        with pytest.raises(ValidationError, match="does not follow"):
            parse_tax_rules(raw_2026)

    def test_overlapping_brackets(self, raw_2026):
        raw_2026["married"]["tax_brackets"][2]["lower_bound"] = 99000

        with pytest.raises(ValidationError):
            parse_tax_rules(raw_2026)

    def test_first_bracket_must_start_at_zero(self, raw_2026):
        raw_2026["single"]["tax_brackets"][0]["lower_bound"] = 1

        with pytest.raises(ValidationError, match="start at 0"):
            parse_tax_rules(raw_2026)

    def test_top_bracket_must_be_unbounded(self, raw_2026):
        raw_2026["single"]["tax_brackets"][-1]["upper_bound"] = 10_000_000

        with pytest.raises(ValidationError, match="unbounded"):
            parse_tax_rules(raw_2026)

    def test_rate_out_of_range(self, raw_2026):
        raw_2026["single"]["tax_brackets"][0]["rate"] = 10

        with pytest.raises(ValidationError):
            parse_tax_rules(raw_2026)

    def test_unknown_bracket_field(self, raw_2026):
        raw_2026["single"]["tax_brackets"][0]["up_to"] = 12250

        with pytest.raises(ValidationError):
            parse_tax_rules(raw_2026)

    def test_self_employment_defaults(self, raw_2026):
        del raw_2026["self_employment"]

        rules = parse_tax_rules(raw_2026)
        assert rules.self_employment.earnings_factor == 0.9235
        assert rules.self_employment.deduction_rate == 0.5

    def test_penalty_estimate_defaults(self, raw_2026):
        del raw_2026["safe_harbor"]["underpayment_interest_rate"]
        del raw_2026["safe_harbor"]["months_underpaid"]

        harbor = parse_tax_rules(raw_2026).safe_harbor
        assert harbor.underpayment_interest_rate == 0.08
        assert harbor.months_underpaid == 6
