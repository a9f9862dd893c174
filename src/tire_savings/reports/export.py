"""Tabular export of calculation reports (CSV).

Column names follow the stored calculation record, so exported sheets line
up with what the back-office already knows.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from tire_savings.config.submission import Submission
from tire_savings.models.results import CalculationReport


EXPORT_COLUMNS: list[str] = [
    "companyName",
    "fleetSize",
    "totalTires",
    "fuelConsumption",
    "fuelPrice",
    "monthlyMileage",
    "tireLifespan",
    "tirePrice",
    "retreadPrice",
    "tirePressureCheck",
    "retreadingCycles",
    "r1TireLifespan",
    "r2TireLifespan",
    "vehiclesWithTracking",
    "trackingCostPerVehicle",
    "fuelSavingsPercentage",
    "cpkImprovementPercentage",
    "carcassSavingsPercentage",
    "fuelSavingsSource",
    "cpkImprovementSource",
    "carcassSavingsSource",
    "savingsPerTirePerMonth",
    "cpkImprovement",
    "fuelSavings",
    "carcassSavings",
    "trackingTotalCost",
    "totalSavings",
    "annualSavings",
    "additionalGainsTotal",
    "newTireCycle",
    "r1TireCycle",
    "r2TireCycle",
    "totalTireCycle",
]


def flatten_report(submission: Submission, report: CalculationReport) -> dict[str, Any]:
    """One export row: the submitted inputs next to the report's figures."""
    calc = submission.calculation
    pct = report.percentages
    result = report.result
    savings = result.itemized_savings
    cycle = result.tire_cycle
    return {
        "companyName": submission.company_name,
        "fleetSize": calc.fleet_size,
        "totalTires": calc.total_tires,
        "fuelConsumption": calc.fuel_consumption,
        "fuelPrice": calc.fuel_price,
        "monthlyMileage": calc.monthly_mileage,
        "tireLifespan": calc.tire_lifespan,
        "tirePrice": calc.tire_price,
        "retreadPrice": calc.retread_price,
        "tirePressureCheck": submission.tire_pressure_check,
        "retreadingCycles": calc.retreading_cycles,
        "r1TireLifespan": calc.r1_tire_lifespan,
        "r2TireLifespan": calc.r2_tire_lifespan,
        "vehiclesWithTracking": calc.vehicles_with_tracking,
        "trackingCostPerVehicle": calc.tracking_cost_per_vehicle,
        "fuelSavingsPercentage": pct.fuel_savings_pct,
        "cpkImprovementPercentage": pct.cpk_improvement_pct,
        "carcassSavingsPercentage": pct.carcass_savings_pct,
        "fuelSavingsSource": submission.fuel_savings_source,
        "cpkImprovementSource": submission.cpk_improvement_source,
        "carcassSavingsSource": submission.carcass_savings_source,
        "savingsPerTirePerMonth": result.savings_per_tire_per_month,
        "cpkImprovement": savings.cpk_improvement,
        "fuelSavings": savings.fuel_savings,
        "carcassSavings": savings.carcass_savings,
        "trackingTotalCost": result.tracking.tracking_total_cost,
        "totalSavings": savings.total,
        "annualSavings": report.annual_savings,
        "additionalGainsTotal": report.additional_gains_total,
        "newTireCycle": cycle.new,
        "r1TireCycle": cycle.r1,
        "r2TireCycle": cycle.r2,
        "totalTireCycle": cycle.total,
    }


def reports_to_frame(
    submissions: list[Submission],
    reports: list[CalculationReport],
) -> pd.DataFrame:
    """DataFrame with one row per report, columns in EXPORT_COLUMNS order."""
    if len(submissions) != len(reports):
        raise ValueError(
            f"got {len(submissions)} submissions but {len(reports)} reports"
        )
    rows = [flatten_report(s, r) for s, r in zip(submissions, reports)]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_csv(submissions: list[Submission], reports: list[CalculationReport]) -> str:
    """CSV text for the given reports (header row included, no index)."""
    return reports_to_frame(submissions, reports).to_csv(index=False)
