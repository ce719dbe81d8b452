from datetime import datetime
from typing import Annotated, Any, Optional

from fastapi import Path
from pydantic import BaseModel, BeforeValidator, Field, PositiveInt, field_validator

from dpstore.common.datapoint import DATA_FIELDS, LIST_FILTERS, DayNight, WindDirection

DATAPOINT_ID_PATTERN = r"^[a-fA-F0-9]{24}$"

DatapointId = Annotated[str, Path(pattern=DATAPOINT_ID_PATTERN)]
"""Path parameter `datapointId`, hex string of a MongoDB ObjectId"""


def reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Input should be a finite number")
    return value


Number = Annotated[float, BeforeValidator(reject_bool), Field(allow_inf_nan=False)]
"""Finite number, booleans are not numbers here"""


class DatapointBody(BaseModel, use_enum_values=True):
    """Datapoint fields sent by clients on create, replace and update

    All fields are optional, but an explicit `null` is rejected.
    Unknown fields are ignored.
    """

    windspeed: Optional[Number] = None
    winddirection: Optional[WindDirection] = None
    temperature: Optional[Number] = None
    humidity: Optional[Number] = None
    barpressure: Optional[Number] = None
    altitude: Optional[Number] = None
    daynight: Optional[DayNight] = None

    # Defaults are not validated, so this only sees values present in request
    @field_validator(*DATA_FIELDS)
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Value must not be null")
        return v

    def data(self) -> dict[str, Any]:
        """Returns only fields present in request."""
        return self.model_dump(exclude_unset=True)


class DatapointListQuery(BaseModel, use_enum_values=True):
    """Query parameters of datapoint listing

    Attributes:
        page: 1-based page number
        perPage: number of datapoints per page
        createdAt, windspeed: optional equality filters
        (rest): validated, but not used for filtering
    """

    page: PositiveInt = 1
    perPage: Annotated[int, Field(ge=1, le=100)] = 30
    createdAt: Optional[datetime] = None
    windspeed: Optional[Number] = None
    winddirection: Optional[WindDirection] = None
    temperature: Optional[Number] = None
    humidity: Optional[Number] = None
    barpressure: Optional[Number] = None
    altitude: Optional[Number] = None
    daynight: Optional[DayNight] = None

    def filters(self) -> dict[str, Any]:
        return self.model_dump(include=set(LIST_FILTERS), exclude_none=True)
