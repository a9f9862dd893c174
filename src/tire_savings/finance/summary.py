"""Calculation report — a submission's result with its derived figures."""

from __future__ import annotations

from tire_savings.config.percentages import DEFAULT_PERCENTAGES, SavingsPercentages
from tire_savings.config.submission import AdditionalGain, Submission
from tire_savings.engine.savings import compute_savings
from tire_savings.engine.tire_cycle import compute_tire_cycle_totals
from tire_savings.models.results import CalculationReport

MONTHS_PER_YEAR = 12


def total_additional_gains(gains: list[AdditionalGain]) -> float:
    """Sum the gains that have a name and a positive value."""
    return sum(g.value for g in gains if g.name.strip() and g.value > 0)


def build_report(
    submission: Submission,
    percentages: SavingsPercentages = DEFAULT_PERCENTAGES,
) -> CalculationReport:
    """Run the calculation for a submission and package it for display."""
    calc = submission.calculation
    result = compute_savings(calc, percentages)
    return CalculationReport(
        company_name=submission.company_name,
        percentages=percentages.resolve(calc),
        result=result,
        tire_cycle_totals=compute_tire_cycle_totals(calc),
        annual_savings=result.itemized_savings.total * MONTHS_PER_YEAR,
        additional_gains_total=total_additional_gains(submission.additional_gains),
    )
