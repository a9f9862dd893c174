"""Shared pydantic base — snake_case in Python, camelCase on the JSON boundary."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model that reads and writes camelCase JSON.

    Both ``fleet_size`` and ``fleetSize`` are accepted on input; dumps use
    the camelCase alias when ``by_alias=True`` (FastAPI does this by default).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
