"""Rich renderer for estimated tax results.

Transforms SDK results into formatted Rich tables.
"""

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from taxshield.sdk.formatting import format_currency, format_currency_with_cents, format_percentage
from taxshield.sdk.report import payment_schedule, penalty_comparison, recommended_method
from taxshield.sdk.schemas import TaxInputs, TaxResult
from taxshield.sdk.taxes.schemas import TaxRules


STATUS_LABELS = {
    "single": "Single",
    "married": "Married Filing Jointly",
}


def render_estimate(console: Console, result: TaxResult, rules: TaxRules, inputs: TaxInputs) -> None:
    """Render an estimate as Rich tables.

    Args:
        console: Rich Console instance
        result: Output of calculate_taxes()
        rules: Rules the result was computed with
        inputs: Inputs the result was computed from
    """
    _render_inputs(console, rules, inputs)
    _render_current_year(console, result)
    _render_comparison(console, result)
    _render_recommendation(console, result)
    _render_penalty_comparison(console, result, rules, inputs)
    _render_schedule(console, result, rules)


def _render_inputs(console: Console, rules: TaxRules, inputs: TaxInputs) -> None:
    """Render inputs panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Tax year", str(rules.year))
    table.add_row("Filing status", STATUS_LABELS.get(inputs.filing_status, inputs.filing_status))
    table.add_row("Prior year tax", format_currency(inputs.prior_year_tax))
    table.add_row("Prior year AGI", format_currency(inputs.prior_year_agi))
    table.add_row("Projected net profit", format_currency(inputs.current_year_profit))

    console.print(Panel(table, title="Inputs", border_style="dim"))


def _render_current_year(console: Console, result: TaxResult) -> None:
    """Render SE tax and income tax breakdown."""
    se_tax = result.self_employment_tax
    income_tax = result.income_tax

    table = Table(title="Projected Current Year Tax", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=32)
    table.add_column("Amount", justify="right", min_width=12)

    table.add_row("[bold]SELF-EMPLOYMENT TAX[/bold]", "")
    table.add_row("  Social Security", format_currency(se_tax.social_security_tax))
    table.add_row("  Medicare", format_currency(se_tax.medicare_tax))
    if se_tax.additional_medicare_tax > 0:
        table.add_row("  Additional Medicare", format_currency(se_tax.additional_medicare_tax))
    table.add_row("  [dim]Total SE Tax[/dim]", f"[dim]{format_currency(se_tax.total_se_tax)}[/dim]")
    table.add_row("  [dim]Deductible half[/dim]", f"[dim]{format_currency(se_tax.se_tax_deduction)}[/dim]")
    table.add_row("", "")

    table.add_row("[bold]FEDERAL INCOME TAX[/bold]", "")
    table.add_row("  Taxable income", format_currency(income_tax.taxable_income))
    for detail in income_tax.bracket_details:
        label = f"  {format_percentage(detail.rate)} on {format_currency(detail.taxable_at_rate)}"
        table.add_row(label, format_currency(detail.tax_at_rate))
    table.add_row("  [dim]Total Income Tax[/dim]", f"[dim]{format_currency(income_tax.federal_income_tax)}[/dim]")
    table.add_row("", "")

    table.add_row("[bold]TOTAL PROJECTED TAX[/bold]", f"[bold]{format_currency(result.current_year_total_tax)}[/bold]")

    console.print(table)


def _render_comparison(console: Console, result: TaxResult) -> None:
    """Render the two penalty-avoidance amounts side by side."""
    table = Table(title="Penalty Avoidance Options", box=box.ROUNDED)
    table.add_column("Method", style="bold", min_width=32)
    table.add_column("Annual", justify="right", min_width=12)

    current_style = "green" if result.is_current_year_lower else ""
    harbor_style = "" if result.is_current_year_lower else "green"

    table.add_row("90% of projected tax", format_currency(result.current_year_avoidance_minimum), style=current_style)
    table.add_row(
        f"Safe Harbor ({format_percentage(result.safe_harbor_multiplier)} of prior year)",
        format_currency(result.safe_harbor_minimum),
        style=harbor_style,
    )

    console.print(table)


def _render_recommendation(console: Console, result: TaxResult) -> None:
    """Render recommended method panel."""
    lines = [
        f"Recommended method: [bold]{recommended_method(result)}[/bold]",
        f"[bold green]Pay {format_currency(result.quarterly_payment)} per quarter[/bold green]"
        f" ({format_currency(result.required_annual_payment)} per year)",
    ]
    if result.savings > 0:
        lines.append(f"[dim]You save {format_currency(result.savings)} compared to the alternative.[/dim]")

    console.print(Panel("\n".join(lines), title="Recommendation", border_style="green"))


def _render_penalty_comparison(console: Console, result: TaxResult, rules: TaxRules, inputs: TaxInputs) -> None:
    """Render what Safe Harbor protects against (skipped without prior-year tax)."""
    comparison = penalty_comparison(result, inputs, rules)
    if comparison is None:
        return

    months = rules.safe_harbor.months_underpaid
    table = Table(title="Safe Harbor Protection", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=32)
    table.add_column("Amount", justify="right", min_width=12)

    table.add_row("[bold]WITHOUT SAFE HARBOR[/bold]", "")
    table.add_row("  Potential underpayment", f"[yellow]{format_currency(comparison.worst_case_underpayment)}[/yellow]")
    table.add_row(
        f"  Est. penalty ({format_percentage(rules.safe_harbor.underpayment_interest_rate)}, {months} months)",
        f"[red]{format_currency(comparison.potential_penalty)}[/red]",
    )
    table.add_row("", "")
    table.add_row("[bold]WITH SAFE HARBOR[/bold]", "")
    table.add_row("  Penalty protection", "[green]100%[/green]")
    if comparison.cash_flow_savings > 0:
        table.add_row("  Lower required payments", f"[green]{format_currency(comparison.cash_flow_savings)}[/green]")

    console.print(table)


def _render_schedule(console: Console, result: TaxResult, rules: TaxRules) -> None:
    """Render quarterly payment schedule."""
    schedule = payment_schedule(result, rules)
    if not schedule:
        return

    table = Table(title="Quarterly Payment Schedule", box=box.ROUNDED)
    table.add_column("Quarter", style="bold")
    table.add_column("Due", min_width=14)
    table.add_column("Amount", justify="right", min_width=12)

    for payment in schedule:
        table.add_row(payment.label, payment.due_date.strftime("%b %d, %Y"), format_currency_with_cents(payment.amount))
    table.add_row("[dim]Annual total[/dim]", "", f"[dim]{format_currency_with_cents(result.required_annual_payment)}[/dim]")

    console.print(table)
