"""Result types — the contract between engine, reports, API and dashboard.

Every value here is monthly and unrounded unless stated otherwise.
Rounding belongs to whoever displays the numbers.
"""

from __future__ import annotations

from tire_savings.config.base import CamelModel
from tire_savings.config.percentages import SavingsPercentages


# ═══════════════════════════════════════════════════════════════════════════
# Tire lifecycle
# ═══════════════════════════════════════════════════════════════════════════

class TireCycleTotals(CamelModel):
    """Lifecycle figures for one tire carcass, computed once per calculation."""

    num_recaps: int
    """Retreads performed on the carcass (0, 1 or 2)."""

    r1_km: int
    """Kilometres after the first retread; 0 without one."""

    r2_km: int
    """Kilometres after the second retread; 0 without one."""

    total_km: int
    """tire_lifespan + r1_km + r2_km."""

    total_months: float
    """total_km / monthly_mileage."""

    tire_total_cost: float
    """tire_price + num_recaps × retread_price."""

    cost_per_km: float
    """tire_total_cost / total_km (0 when total_km is 0)."""


class TireCycle(CamelModel):
    """Duration of each tire life stage, in months."""

    new: float
    r1: float
    r2: float
    total: float


# ═══════════════════════════════════════════════════════════════════════════
# Savings
# ═══════════════════════════════════════════════════════════════════════════

class ItemizedSavings(CamelModel):
    """Monthly savings per term. ``total`` also includes the tracking cost."""

    fuel_savings: float
    cpk_improvement: float
    carcass_savings: float
    total: float


class TrackingCost(CamelModel):
    """Monthly tracking subscription cost for the tracked vehicles."""

    vehicles_with_tracking: int
    tracking_cost_per_vehicle: float
    tracking_total_cost: float


class SavingsResult(CamelModel):
    """Output of one savings calculation."""

    itemized_savings: ItemizedSavings
    tracking: TrackingCost
    tire_cycle: TireCycle
    savings_per_tire_per_month: float


# ═══════════════════════════════════════════════════════════════════════════
# Reports
# ═══════════════════════════════════════════════════════════════════════════

class CalculationReport(CamelModel):
    """A submission's result packaged for display and export.

    ``result`` is carried verbatim from the engine; the extra figures are
    derived from it, never recomputed from the inputs.
    """

    company_name: str
    percentages: SavingsPercentages
    """Percentages actually applied (defaults already resolved)."""

    result: SavingsResult
    tire_cycle_totals: TireCycleTotals

    annual_savings: float
    """result.itemized_savings.total × 12."""

    additional_gains_total: float
    """Sum of the listed additional gains with a name and a positive value."""
