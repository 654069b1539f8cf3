"""Estimated tax calculations for self-employed filers.

Computes the required annual estimated payment as the lesser of:
- 90% of the projected current-year tax (SE tax + federal income tax)
- the Safe Harbor amount (100% or 110% of last year's tax)

All functions are pure: they take a TaxRules table and return frozen
result models. No rounding is done here; round at display time.
"""

import logging

from ..schemas import (
    BracketDetail,
    IncomeTaxBreakdown,
    SafeHarborResult,
    SelfEmploymentBreakdown,
    TaxInputs,
    TaxResult,
)
from .schemas import TaxRules

logger = logging.getLogger(__name__)


def compute_se_tax(net_profit: float, filing_status: str, rules: TaxRules) -> SelfEmploymentBreakdown:
    """Calculate self-employment tax (Schedule SE).

    Args:
        net_profit: Net Schedule C profit; negative is treated as zero
        filing_status: 'single' or 'married'
        rules: Tax rules for the year

    Returns:
        SelfEmploymentBreakdown with SS, Medicare, Additional Medicare
        and the deductible half of the total
    """
    status_rules = rules.for_status(filing_status)
    se_taxable_earnings = max(0.0, net_profit) * rules.self_employment.earnings_factor

    # Social Security stops at the wage base
    ss_taxable = min(se_taxable_earnings, rules.social_security.wage_base)
    social_security_tax = ss_taxable * rules.social_security.tax_rate

    medicare_tax = se_taxable_earnings * rules.medicare.tax_rate

    # Additional Medicare applies only to the excess over the threshold
    excess = max(0.0, se_taxable_earnings - status_rules.additional_medicare_threshold)
    additional_medicare_tax = excess * rules.medicare.additional_rate

    total_se_tax = social_security_tax + medicare_tax + additional_medicare_tax

    return SelfEmploymentBreakdown(
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        additional_medicare_tax=additional_medicare_tax,
        total_se_tax=total_se_tax,
        se_tax_deduction=total_se_tax * rules.self_employment.deduction_rate,
    )


def compute_income_tax(
    net_profit: float,
    se_tax_deduction: float,
    filing_status: str,
    rules: TaxRules,
) -> IncomeTaxBreakdown:
    """Calculate federal income tax by walking the progressive brackets.

    AGI is net profit less the deductible half of SE tax; taxable income is
    AGI less the standard deduction, floored at zero. Only the income that
    falls inside each bracket is taxed at that bracket's rate.
    """
    status_rules = rules.for_status(filing_status)

    agi = net_profit - se_tax_deduction
    taxable_income = max(0.0, agi - status_rules.standard_deduction)

    remaining_income = taxable_income
    federal_income_tax = 0.0
    bracket_details = []

    for bracket in status_rules.tax_brackets:
        if remaining_income <= 0:
            break

        taxable_at_rate = min(remaining_income, bracket.span)
        tax_at_rate = taxable_at_rate * bracket.rate

        if taxable_at_rate > 0:
            bracket_details.append(BracketDetail(
                rate=bracket.rate,
                taxable_at_rate=taxable_at_rate,
                tax_at_rate=tax_at_rate,
            ))

        federal_income_tax += tax_at_rate
        remaining_income -= taxable_at_rate

    return IncomeTaxBreakdown(
        taxable_income=taxable_income,
        federal_income_tax=federal_income_tax,
        bracket_details=bracket_details,
    )


def compute_safe_harbor(prior_year_tax: float, prior_year_agi: float, rules: TaxRules) -> SafeHarborResult:
    """Safe Harbor minimum: 110% of last year's tax above the AGI threshold, else 100%."""
    safe_harbor = rules.safe_harbor
    if prior_year_agi > safe_harbor.high_income_threshold:
        multiplier = safe_harbor.high_income_multiplier
    else:
        multiplier = safe_harbor.standard_multiplier

    return SafeHarborResult(
        safe_harbor_minimum=prior_year_tax * multiplier,
        multiplier=multiplier,
    )


def calculate_taxes(inputs: TaxInputs, rules: TaxRules) -> TaxResult:
    """Compute the full estimate for one set of inputs.

    Args:
        inputs: Filing status and the three dollar figures
        rules: Tax rules for the year

    Returns:
        TaxResult; required_annual_payment is the lesser of the two
        penalty-avoidance amounts and quarterly_payment is a quarter of it
    """
    filing_status = inputs.filing_status
    profit = inputs.current_year_profit

    se_tax = compute_se_tax(profit, filing_status, rules)
    income_tax = compute_income_tax(profit, se_tax.se_tax_deduction, filing_status, rules)

    current_year_total_tax = se_tax.total_se_tax + income_tax.federal_income_tax
    current_year_avoidance_minimum = current_year_total_tax * rules.safe_harbor.current_year_multiplier

    safe_harbor = compute_safe_harbor(inputs.prior_year_tax, inputs.prior_year_agi, rules)
    safe_harbor_minimum = safe_harbor.safe_harbor_minimum

    required_annual_payment = min(safe_harbor_minimum, current_year_avoidance_minimum)

    logger.debug(
        f"estimate {rules.year} {filing_status}: current={current_year_avoidance_minimum:.2f} "
        f"safe_harbor={safe_harbor_minimum:.2f} required={required_annual_payment:.2f}"
    )

    return TaxResult(
        self_employment_tax=se_tax,
        income_tax=income_tax,
        current_year_total_tax=current_year_total_tax,
        current_year_avoidance_minimum=current_year_avoidance_minimum,
        safe_harbor_multiplier=safe_harbor.multiplier,
        safe_harbor_minimum=safe_harbor_minimum,
        required_annual_payment=required_annual_payment,
        quarterly_payment=required_annual_payment / 4,
        # A tie goes to Safe Harbor
        is_current_year_lower=current_year_avoidance_minimum < safe_harbor_minimum,
        savings=abs(safe_harbor_minimum - current_year_avoidance_minimum),
    )
