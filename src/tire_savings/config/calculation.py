"""Calculation input — one validated submission of the savings form.

This model is the validator in front of the engine: anything that reaches
``compute_savings`` has already passed these constraints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from tire_savings.config.base import CamelModel


RetreadingCycles = Literal["0", "1", "2"]


class CalculationInput(CamelModel):
    """Fleet, fuel and tire parameters for one savings calculation."""

    # --- Fleet ---
    fleet_size: int = Field(ge=1, description="Number of vehicles (tractors / buses) in the fleet")
    total_tires: int = Field(ge=1, description="Total tires across the fleet")

    # --- Fuel ---
    fuel_consumption: float = Field(gt=0, description="Fuel efficiency (km per litre)")
    fuel_price: float = Field(gt=0, description="Price per litre of fuel")

    # --- Operation ---
    monthly_mileage: int = Field(ge=1, description="Kilometres driven per vehicle per month")
    tire_lifespan: int = Field(ge=1, description="Kilometres a new tire lasts")

    # --- Prices ---
    tire_price: float = Field(ge=1, description="Price of a new tire")
    retread_price: float = Field(ge=1, description="Price of one retread")

    # --- Retreading ---
    retreading_cycles: RetreadingCycles = Field(
        description="Retreads performed per carcass: '0', '1' or '2'",
    )
    r1_tire_lifespan: int | None = Field(
        default=None, ge=1, validate_default=True,
        description="Kilometres after the first retread. Required when retreading_cycles is '1' or '2'.",
    )
    r2_tire_lifespan: int | None = Field(
        default=None, ge=1, validate_default=True,
        description="Kilometres after the second retread. Required when retreading_cycles is '2'.",
    )

    # --- Tracking ---
    vehicles_with_tracking: int = Field(default=0, ge=0, description="Vehicles with a tracking subscription")
    tracking_cost_per_vehicle: float = Field(default=0.0, ge=0, description="Monthly tracking cost per vehicle")

    # --- Percentages (None = use the configured default) ---
    fuel_savings_percentage: float | None = Field(default=None, ge=0, le=100)
    cpk_improvement_percentage: float | None = Field(default=None, ge=0, le=100)
    carcass_savings_percentage: float | None = Field(default=None, ge=0, le=100)

    @field_validator("retreading_cycles", mode="before")
    @classmethod
    def _cycles_as_text(cls, value: object) -> object:
        # Stored and posted as text; accept 0/1/2 as well.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("r1_tire_lifespan")
    @classmethod
    def _r1_required_with_retreads(cls, value: int | None, info: ValidationInfo) -> int | None:
        cycles = info.data.get("retreading_cycles")
        if value is None and cycles in ("1", "2"):
            raise ValueError("r1 tire lifespan is required when there is at least one retread")
        return value

    @field_validator("r2_tire_lifespan")
    @classmethod
    def _r2_required_with_two_retreads(cls, value: int | None, info: ValidationInfo) -> int | None:
        if value is None and info.data.get("retreading_cycles") == "2":
            raise ValueError("r2 tire lifespan is required when there are two retreads")
        return value

    @property
    def num_recaps(self) -> int:
        """Integer number of retreads (0, 1 or 2)."""
        return int(self.retreading_cycles)
