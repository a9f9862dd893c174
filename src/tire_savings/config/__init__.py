"""Configuration models — validated calculation inputs."""

from tire_savings.config.calculation import CalculationInput, RetreadingCycles
from tire_savings.config.percentages import (
    DEFAULT_CARCASS_SAVINGS_PCT,
    DEFAULT_CPK_IMPROVEMENT_PCT,
    DEFAULT_FUEL_SAVINGS_PCT,
    DEFAULT_PERCENTAGES,
    SavingsPercentages,
)
from tire_savings.config.submission import AdditionalGain, Submission

__all__ = [
    "CalculationInput",
    "RetreadingCycles",
    "SavingsPercentages",
    "DEFAULT_FUEL_SAVINGS_PCT",
    "DEFAULT_CPK_IMPROVEMENT_PCT",
    "DEFAULT_CARCASS_SAVINGS_PCT",
    "DEFAULT_PERCENTAGES",
    "AdditionalGain",
    "Submission",
]
