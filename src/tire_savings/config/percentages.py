"""Savings percentages — the three business assumptions behind every calculation.

The defaults are named constants and travel into the engine as an explicit
argument; nothing reads them from module state at calculation time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field

from tire_savings.config.base import CamelModel

if TYPE_CHECKING:
    from tire_savings.config.calculation import CalculationInput


DEFAULT_FUEL_SAVINGS_PCT = 1.0
DEFAULT_CPK_IMPROVEMENT_PCT = 5.0
DEFAULT_CARCASS_SAVINGS_PCT = 10.0


class SavingsPercentages(CamelModel):
    """Concrete percentages (0–100) used by one calculation."""

    fuel_savings_pct: float = Field(
        default=DEFAULT_FUEL_SAVINGS_PCT, ge=0, le=100,
        description="Share of monthly fleet fuel spend saved (%)",
    )
    cpk_improvement_pct: float = Field(
        default=DEFAULT_CPK_IMPROVEMENT_PCT, ge=0, le=100,
        description="Extra kilometres gained over the full tire lifecycle (%)",
    )
    carcass_savings_pct: float = Field(
        default=DEFAULT_CARCASS_SAVINGS_PCT, ge=0, le=100,
        description="Carcass savings assumption applied to retreaded tires (%)",
    )

    def resolve(self, calc: CalculationInput) -> SavingsPercentages:
        """Fill every percentage the calculation leaves unset from ``self``."""
        return SavingsPercentages(
            fuel_savings_pct=_pick(calc.fuel_savings_percentage, self.fuel_savings_pct),
            cpk_improvement_pct=_pick(calc.cpk_improvement_percentage, self.cpk_improvement_pct),
            carcass_savings_pct=_pick(calc.carcass_savings_percentage, self.carcass_savings_pct),
        )


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


DEFAULT_PERCENTAGES = SavingsPercentages()
