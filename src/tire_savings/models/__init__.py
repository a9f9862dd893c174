"""Result models — calculation output contracts."""

from tire_savings.models.results import (
    CalculationReport,
    ItemizedSavings,
    SavingsResult,
    TireCycle,
    TireCycleTotals,
    TrackingCost,
)

__all__ = [
    "CalculationReport",
    "ItemizedSavings",
    "SavingsResult",
    "TireCycle",
    "TireCycleTotals",
    "TrackingCost",
]
