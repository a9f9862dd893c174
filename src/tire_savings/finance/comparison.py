"""Side-by-side comparison of several calculations.

Builds the rows of a comparison table, flags the fields whose values differ
between rows, and ranks the calculations by total monthly savings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tire_savings.config.percentages import DEFAULT_PERCENTAGES, SavingsPercentages
from tire_savings.config.submission import Submission
from tire_savings.finance.summary import build_report
from tire_savings.models.results import CalculationReport


# Columns shown in the comparison table, in display order.
COMPARISON_FIELDS: list[str] = [
    "fleet_size",
    "total_tires",
    "fuel_consumption",
    "fuel_price",
    "monthly_mileage",
    "tire_lifespan",
    "tire_price",
    "retread_price",
    "retreading_cycles",
    "r1_tire_lifespan",
    "r2_tire_lifespan",
    "vehicles_with_tracking",
    "tracking_cost_per_vehicle",
    "fuel_savings_pct",
    "cpk_improvement_pct",
    "carcass_savings_pct",
    "fuel_savings",
    "cpk_improvement",
    "carcass_savings",
    "tracking_total_cost",
    "total_savings",
    "savings_per_tire_per_month",
]


@dataclass(frozen=True)
class RankingEntry:
    """One calculation's place in the ranking."""

    position: int
    """1 = highest total monthly savings."""

    index: int
    """Position of the submission in the request."""

    company_name: str
    total_savings: float
    savings_per_tire_per_month: float


@dataclass
class ComparisonResult:
    """Comparison table plus ranking."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    """One dict per submission, keyed by ``company_name`` and COMPARISON_FIELDS."""

    differing_fields: list[str] = field(default_factory=list)
    """COMPARISON_FIELDS whose value is not the same in every row."""

    ranking: list[RankingEntry] = field(default_factory=list)
    reports: list[CalculationReport] = field(default_factory=list)


def comparison_row(submission: Submission, report: CalculationReport) -> dict[str, Any]:
    """Flatten one submission and its report into a comparison-table row."""
    calc = submission.calculation
    pct = report.percentages
    savings = report.result.itemized_savings
    return {
        "company_name": submission.company_name,
        "fleet_size": calc.fleet_size,
        "total_tires": calc.total_tires,
        "fuel_consumption": calc.fuel_consumption,
        "fuel_price": calc.fuel_price,
        "monthly_mileage": calc.monthly_mileage,
        "tire_lifespan": calc.tire_lifespan,
        "tire_price": calc.tire_price,
        "retread_price": calc.retread_price,
        "retreading_cycles": calc.retreading_cycles,
        "r1_tire_lifespan": calc.r1_tire_lifespan,
        "r2_tire_lifespan": calc.r2_tire_lifespan,
        "vehicles_with_tracking": calc.vehicles_with_tracking,
        "tracking_cost_per_vehicle": calc.tracking_cost_per_vehicle,
        "fuel_savings_pct": pct.fuel_savings_pct,
        "cpk_improvement_pct": pct.cpk_improvement_pct,
        "carcass_savings_pct": pct.carcass_savings_pct,
        "fuel_savings": savings.fuel_savings,
        "cpk_improvement": savings.cpk_improvement,
        "carcass_savings": savings.carcass_savings,
        "tracking_total_cost": report.result.tracking.tracking_total_cost,
        "total_savings": savings.total,
        "savings_per_tire_per_month": report.result.savings_per_tire_per_month,
    }


def find_differing_fields(rows: list[dict[str, Any]]) -> list[str]:
    """Fields whose value differs from the first row in at least one other row."""
    if len(rows) <= 1:
        return []
    first = rows[0]
    return [
        name for name in COMPARISON_FIELDS
        if any(row[name] != first[name] for row in rows[1:])
    ]


def compare_submissions(
    submissions: list[Submission],
    percentages: SavingsPercentages = DEFAULT_PERCENTAGES,
) -> ComparisonResult:
    """Compare submissions side by side.

    Raises
    ------
    ValueError
        If ``submissions`` is empty.
    """
    if not submissions:
        raise ValueError("at least one submission is required for a comparison")

    reports = [build_report(s, percentages) for s in submissions]
    rows = [comparison_row(s, r) for s, r in zip(submissions, reports)]

    order = sorted(
        range(len(reports)),
        key=lambda i: reports[i].result.itemized_savings.total,
        reverse=True,
    )
    ranking = [
        RankingEntry(
            position=pos,
            index=i,
            company_name=reports[i].company_name,
            total_savings=reports[i].result.itemized_savings.total,
            savings_per_tire_per_month=reports[i].result.savings_per_tire_per_month,
        )
        for pos, i in enumerate(order, start=1)
    ]

    return ComparisonResult(
        rows=rows,
        differing_fields=find_differing_fields(rows),
        ranking=ranking,
        reports=reports,
    )
