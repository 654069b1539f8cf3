"""Estimate generation and output (JSON dict, CSV).

generate_estimate() is the main entry point for presentation layers: it
loads the year's rules, runs the calculation, and returns structured data
with the recommendation and quarterly payment schedule attached.
"""

import csv
import io
from pathlib import Path
from typing import List, Literal, Optional, Union

from .config import get_default_tax_year
from .formatting import format_percentage
from .schemas import PenaltyComparison, QuarterlyPayment, TaxInputs, TaxResult
from .taxes.estimate import calculate_taxes
from .taxes.rules import load_tax_rules
from .taxes.schemas import TaxRules

CURRENT_YEAR_METHOD = "Current Year Estimate"
SAFE_HARBOR_METHOD = "Safe Harbor"


def recommended_method(result: TaxResult) -> str:
    """Name of the method that yields the lower required payment."""
    return CURRENT_YEAR_METHOD if result.is_current_year_lower else SAFE_HARBOR_METHOD


def payment_schedule(result: TaxResult, rules: TaxRules) -> List[QuarterlyPayment]:
    """Quarterly installments: the same amount on each due date."""
    return [
        QuarterlyPayment(label=due.label, due_date=due.due_date, amount=result.quarterly_payment)
        for due in rules.payment_due_dates
    ]


def penalty_comparison(result: TaxResult, inputs: TaxInputs, rules: TaxRules) -> Optional[PenaltyComparison]:
    """Estimate the penalty the Safe Harbor payment protects against.

    Worst case is paying nothing toward the projected tax beyond the Safe
    Harbor amount; the penalty is simple interest on that shortfall for
    the rule table's typical number of months late. Cash flow savings is
    how much less Safe Harbor asks for than 90% of projected tax.

    Returns:
        PenaltyComparison, or None when there is no prior-year tax (no
        Safe Harbor to compare against)
    """
    if inputs.prior_year_tax <= 0:
        return None

    harbor = rules.safe_harbor
    underpayment = max(0.0, result.current_year_total_tax - result.safe_harbor_minimum)
    penalty = underpayment * (harbor.underpayment_interest_rate / 12) * harbor.months_underpaid

    return PenaltyComparison(
        worst_case_underpayment=underpayment,
        potential_penalty=penalty,
        cash_flow_savings=max(0.0, result.current_year_avoidance_minimum - result.safe_harbor_minimum),
    )


def result_to_dict(result: TaxResult, rules: TaxRules, inputs: Optional[TaxInputs] = None) -> dict:
    """Serialize a result with recommendation and schedule for JSON output."""
    data = {
        "year": rules.year,
        "result": result.model_dump(),
        "recommended_method": recommended_method(result),
        "payment_schedule": [p.model_dump(mode="json") for p in payment_schedule(result, rules)],
    }
    if inputs is not None:
        data["inputs"] = inputs.model_dump()
        comparison = penalty_comparison(result, inputs, rules)
        data["penalty_comparison"] = comparison.model_dump() if comparison else None
    return data


def generate_estimate(
    inputs: TaxInputs,
    year: Optional[str] = None,
    output_format: Literal["json", "csv"] = "json",
    rules: Optional[TaxRules] = None,
) -> Union[dict, str]:
    """Generate an estimated tax payment plan.

    Args:
        inputs: Filing status and dollar figures
        year: Tax year (default: settings tax_year, else 2026)
        output_format: "json" returns dict (default), "csv" returns CSV string
        rules: Optional pre-loaded rules (loads from file if not provided)

    Returns:
        dict (json format) or str (csv format)
    """
    if rules is None:
        rules = load_tax_rules(year or get_default_tax_year())

    result = calculate_taxes(inputs, rules)
    estimate = result_to_dict(result, rules, inputs)

    if output_format == "csv":
        output = io.StringIO()
        writer = csv.writer(output)
        _write_estimate_rows(writer, estimate)
        return output.getvalue()

    return estimate


def _write_estimate_rows(writer, estimate: dict) -> None:
    """Write estimate rows (section, item, amount) to a CSV writer.

    Internal function used by both file and string CSV generation.
    """
    result = estimate["result"]
    se_tax = result["self_employment_tax"]
    income_tax = result["income_tax"]

    writer.writerow(["section", "item", "amount"])

    writer.writerow(["self_employment", "social_security_tax", f"{se_tax['social_security_tax']:.2f}"])
    writer.writerow(["self_employment", "medicare_tax", f"{se_tax['medicare_tax']:.2f}"])
    writer.writerow(["self_employment", "additional_medicare_tax", f"{se_tax['additional_medicare_tax']:.2f}"])
    writer.writerow(["self_employment", "total_se_tax", f"{se_tax['total_se_tax']:.2f}"])
    writer.writerow(["self_employment", "se_tax_deduction", f"{se_tax['se_tax_deduction']:.2f}"])

    writer.writerow(["income_tax", "taxable_income", f"{income_tax['taxable_income']:.2f}"])
    for detail in income_tax["bracket_details"]:
        writer.writerow(["income_tax", f"bracket_{format_percentage(detail['rate'])}", f"{detail['tax_at_rate']:.2f}"])
    writer.writerow(["income_tax", "federal_income_tax", f"{income_tax['federal_income_tax']:.2f}"])

    writer.writerow(["comparison", "current_year_total_tax", f"{result['current_year_total_tax']:.2f}"])
    writer.writerow(["comparison", "current_year_avoidance_minimum", f"{result['current_year_avoidance_minimum']:.2f}"])
    writer.writerow(["comparison", "safe_harbor_minimum", f"{result['safe_harbor_minimum']:.2f}"])
    writer.writerow(["comparison", "savings", f"{result['savings']:.2f}"])

    comparison = estimate.get("penalty_comparison")
    if comparison:
        writer.writerow(["penalty", "worst_case_underpayment", f"{comparison['worst_case_underpayment']:.2f}"])
        writer.writerow(["penalty", "potential_penalty", f"{comparison['potential_penalty']:.2f}"])
        writer.writerow(["penalty", "cash_flow_savings", f"{comparison['cash_flow_savings']:.2f}"])

    writer.writerow(["payment", "required_annual_payment", f"{result['required_annual_payment']:.2f}"])
    for payment in estimate["payment_schedule"]:
        writer.writerow(["payment", f"{payment['label']} ({payment['due_date']})", f"{payment['amount']:.2f}"])


def write_estimate_csv(estimate: dict, output_path: Path) -> Path:
    """Write an estimate from generate_estimate() to a CSV file.

    Returns:
        Path to the written file
    """
    with open(output_path, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        _write_estimate_rows(writer, estimate)

    return output_path
