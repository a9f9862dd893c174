"""Submission — a calculation plus the lead information captured with it."""

from __future__ import annotations

from pydantic import Field

from tire_savings.config.base import CamelModel
from tire_savings.config.calculation import CalculationInput


class AdditionalGain(CamelModel):
    """A free-form monthly gain listed next to the calculated savings."""

    name: str = Field(default="", description="Label shown in the report")
    value: float = Field(default=0.0, ge=0, description="Monthly value")


class Submission(CamelModel):
    """Everything the form collects for one lead."""

    company_name: str = Field(min_length=1, description="Company the simulation was made for")
    tire_pressure_check: str | None = Field(
        default=None,
        description="How often tire pressure is checked today (free text)",
    )

    # Where each percentage assumption came from (free text, optional)
    fuel_savings_source: str | None = None
    cpk_improvement_source: str | None = None
    carcass_savings_source: str | None = None

    additional_gains: list[AdditionalGain] = Field(default_factory=list)
    calculation: CalculationInput
