"""Tests for the estimated tax calculation.

Uses the bundled 2026 rules. Expected values are worked by hand from the
2026 table (SS wage base $184,500, single standard deduction $16,100).
"""

import pytest
from pydantic import ValidationError

from taxshield.sdk.schemas import TaxInputs
from taxshield.sdk.taxes import (
    calculate_taxes,
    compute_income_tax,
    compute_safe_harbor,
    compute_se_tax,
    load_tax_rules,
)


@pytest.fixture(scope="module")
def rules():
    return load_tax_rules("2026")


def _inputs(profit=0, prior_tax=0, prior_agi=0, status="single"):
    return TaxInputs(
        filing_status=status,
        prior_year_tax=prior_tax,
        prior_year_agi=prior_agi,
        current_year_profit=profit,
    )


class TestSelfEmploymentTax:
    """Schedule SE: SS capped at the wage base, Medicare uncapped."""

    def test_below_wage_base(self, rules):
        se = compute_se_tax(50000, "single", rules)

        # 50000 * 0.9235 = 46175
        assert se.social_security_tax == pytest.approx(46175 * 0.124)
        assert se.medicare_tax == pytest.approx(46175 * 0.029)
        assert se.additional_medicare_tax == 0
        assert se.total_se_tax == pytest.approx(7064.775)
        assert se.se_tax_deduction == pytest.approx(3532.3875)

    def test_social_security_capped(self, rules):
        se = compute_se_tax(200000, "single", rules)
        assert se.social_security_tax == pytest.approx(184500 * 0.124)

        much_higher = compute_se_tax(5_000_000, "single", rules)
        assert much_higher.social_security_tax == pytest.approx(22878.0)

    def test_additional_medicare_single(self, rules):
        se = compute_se_tax(300000, "single", rules)
        # 277050 earnings, 77050 over the $200k threshold
        assert se.additional_medicare_tax == pytest.approx(77050 * 0.009)

    def test_additional_medicare_married_threshold(self, rules):
        se = compute_se_tax(300000, "married", rules)
        # 277050 earnings, 27050 over the $250k threshold
        assert se.additional_medicare_tax == pytest.approx(243.45)
        assert se.total_se_tax == pytest.approx(22878 + 8034.45 + 243.45)

    def test_total_is_exact_sum(self, rules):
        se = compute_se_tax(412345.67, "married", rules)
        assert se.total_se_tax == se.social_security_tax + se.medicare_tax + se.additional_medicare_tax
        assert se.se_tax_deduction == se.total_se_tax * 0.5

    def test_negative_profit_treated_as_zero(self, rules):
        se = compute_se_tax(-10000, "single", rules)
        assert se.total_se_tax == 0
        assert se.se_tax_deduction == 0

    def test_unknown_filing_status(self, rules):
        with pytest.raises(ValueError, match="Invalid filing status"):
            compute_se_tax(1000, "hoh", rules)


class TestIncomeTax:
    """Progressive bracket walk."""

    def test_below_standard_deduction(self, rules):
        income_tax = compute_income_tax(10000, 0, "single", rules)
        assert income_tax.taxable_income == 0
        assert income_tax.federal_income_tax == 0
        assert income_tax.bracket_details == []

    def test_first_bracket_only(self, rules):
        # Taxable income exactly fills the 10% bracket (0 - 12,250 inclusive)
        income_tax = compute_income_tax(16100 + 12251, 0, "single", rules)
        assert income_tax.taxable_income == 12251
        assert len(income_tax.bracket_details) == 1
        assert income_tax.bracket_details[0].rate == 0.10
        assert income_tax.federal_income_tax == pytest.approx(1225.1)

    def test_marginal_not_flat(self, rules):
        income_tax = compute_income_tax(16100 + 60000, 0, "single", rules)
        # 12251 @ 10% + 37600 @ 12% + 10149 @ 22%
        expected = 1225.1 + 4512 + 10149 * 0.22
        assert income_tax.federal_income_tax == pytest.approx(expected)
        assert income_tax.federal_income_tax < 60000 * 0.22
        assert [d.rate for d in income_tax.bracket_details] == [0.10, 0.12, 0.22]

    def test_top_bracket_unbounded(self, rules):
        income_tax = compute_income_tax(2_000_000, 0, "single", rules)
        top = income_tax.bracket_details[-1]
        assert top.rate == 0.37
        assert top.taxable_at_rate == pytest.approx(2_000_000 - 16100 - 644051)
        assert len(income_tax.bracket_details) == 7

    def test_se_deduction_reduces_agi(self, rules):
        without = compute_income_tax(100000, 0, "single", rules)
        with_deduction = compute_income_tax(100000, 5000, "single", rules)
        assert without.taxable_income - with_deduction.taxable_income == pytest.approx(5000)

    def test_married_uses_married_table(self, rules):
        income_tax = compute_income_tax(32200 + 24501, 0, "married", rules)
        assert income_tax.taxable_income == 24501
        assert income_tax.federal_income_tax == pytest.approx(2450.1)

    @pytest.mark.parametrize("profit", [0, 16100, 28351, 75000, 169782.85, 250000, 700000, 1_250_000])
    @pytest.mark.parametrize("status", ["single", "married"])
    def test_bracket_details_cover_taxable_income(self, rules, profit, status):
        income_tax = compute_income_tax(profit, 0, status, rules)
        details = income_tax.bracket_details

        assert sum(d.taxable_at_rate for d in details) == pytest.approx(income_tax.taxable_income)
        assert sum(d.tax_at_rate for d in details) == pytest.approx(income_tax.federal_income_tax)
        assert all(d.taxable_at_rate > 0 for d in details)
        assert [d.rate for d in details] == sorted(d.rate for d in details)

    @pytest.mark.parametrize("status", ["single", "married"])
    def test_monotonic_in_profit(self, rules, status):
        previous = -1.0
        for profit in range(0, 1_500_000, 12_500):
            result = calculate_taxes(_inputs(profit=profit, status=status), rules)
            assert result.income_tax.federal_income_tax >= previous
            previous = result.income_tax.federal_income_tax


class TestSafeHarbor:
    """100% of prior-year tax, 110% when prior AGI exceeds $150k."""

    def test_threshold_uses_standard_multiplier(self, rules):
        harbor = compute_safe_harbor(25000, 150000, rules)
        assert harbor.multiplier == 1.0
        assert harbor.safe_harbor_minimum == 25000

    def test_above_threshold_uses_high_income_multiplier(self, rules):
        harbor = compute_safe_harbor(25000, 150001, rules)
        assert harbor.multiplier == 1.1
        assert harbor.safe_harbor_minimum == pytest.approx(27500)

    def test_zero_prior_tax(self, rules):
        harbor = compute_safe_harbor(0, 500000, rules)
        assert harbor.safe_harbor_minimum == 0


class TestCalculateTaxes:
    """End-to-end scenarios."""

    def test_single_200k_scenario(self, rules):
        result = calculate_taxes(_inputs(profit=200000, prior_tax=25000, prior_agi=150000), rules)

        se = result.self_employment_tax
        assert se.social_security_tax == pytest.approx(22878)
        assert se.medicare_tax == pytest.approx(5356.3)
        assert se.additional_medicare_tax == 0
        assert se.total_se_tax == pytest.approx(28234.3)
        assert se.se_tax_deduction == pytest.approx(14117.15)

        income_tax = result.income_tax
        assert income_tax.taxable_income == pytest.approx(169782.85)
        # 1225.10 + 4512 + 12430 + 63431.85 * 24%
        assert income_tax.federal_income_tax == pytest.approx(33390.744)
        assert [d.rate for d in income_tax.bracket_details] == [0.10, 0.12, 0.22, 0.24]

        assert result.current_year_total_tax == pytest.approx(61625.044)
        assert result.current_year_avoidance_minimum == pytest.approx(55462.5396)
        assert result.safe_harbor_multiplier == 1.0
        assert result.safe_harbor_minimum == 25000
        assert result.required_annual_payment == 25000
        assert result.quarterly_payment == 6250
        assert result.is_current_year_lower is False
        assert result.savings == pytest.approx(30462.5396)

    def test_current_year_lower(self, rules):
        result = calculate_taxes(_inputs(profit=50000, prior_tax=25000, prior_agi=150000), rules)

        assert result.current_year_total_tax == pytest.approx(10463.8685)
        assert result.current_year_avoidance_minimum == pytest.approx(9417.48165)
        assert result.is_current_year_lower is True
        assert result.required_annual_payment == result.current_year_avoidance_minimum
        assert result.quarterly_payment == pytest.approx(2354.3704125)

    def test_all_zero(self, rules):
        result = calculate_taxes(_inputs(), rules)

        assert result.self_employment_tax.total_se_tax == 0
        assert result.income_tax.federal_income_tax == 0
        assert result.current_year_total_tax == 0
        assert result.safe_harbor_minimum == 0
        assert result.required_annual_payment == 0
        assert result.quarterly_payment == 0
        assert result.savings == 0
        # Tie goes to Safe Harbor
        assert result.is_current_year_lower is False

    def test_negative_inputs_normalized(self, rules):
        inputs = _inputs(profit=-5000, prior_tax=-100, prior_agi=-1)
        assert inputs.current_year_profit == 0
        assert inputs.prior_year_tax == 0

        result = calculate_taxes(inputs, rules)
        assert result.required_annual_payment == 0

    @pytest.mark.parametrize("profit", [0, 30000, 95000, 200000, 480000])
    @pytest.mark.parametrize("prior_tax,prior_agi", [(0, 0), (8000, 60000), (25000, 150000), (90000, 400000)])
    @pytest.mark.parametrize("status", ["single", "married"])
    def test_required_payment_is_lesser(self, rules, profit, prior_tax, prior_agi, status):
        result = calculate_taxes(_inputs(profit, prior_tax, prior_agi, status), rules)

        assert result.required_annual_payment == min(
            result.current_year_avoidance_minimum, result.safe_harbor_minimum
        )
        assert result.quarterly_payment * 4 == pytest.approx(result.required_annual_payment)
        assert result.savings >= 0
        assert result.is_current_year_lower == (
            result.current_year_avoidance_minimum < result.safe_harbor_minimum
        )

    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_inputs_rejected(self, value):
        with pytest.raises(ValidationError):
            TaxInputs(current_year_profit=value)

    def test_results_are_frozen(self, rules):
        result = calculate_taxes(_inputs(profit=1000), rules)
        with pytest.raises(Exception):
            result.quarterly_payment = 0
