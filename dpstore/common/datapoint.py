from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

DATA_FIELDS = (
    "windspeed",
    "winddirection",
    "temperature",
    "humidity",
    "barpressure",
    "altitude",
    "daynight",
)
"""Fields set by clients. Every write path merges only these."""

PUBLIC_FIELDS = ("id", *DATA_FIELDS, "createdAt")
"""Fields of the public representation, see `DatapointRecord.transform`."""

LIST_FILTERS = ("createdAt", "windspeed")
"""Fields usable as equality filters when listing datapoints."""


class WindDirection(str, Enum):
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    ERROR = "Error"


class DayNight(str, Enum):
    DAY = "Day"
    NIGHT = "Night"
    ERROR = "Error"


class DatapointData(BaseModel, use_enum_values=True):
    """Data fields of a datapoint with their defaults

    Numeric readings default to 0, enumerated readings to "Error".
    """

    windspeed: float = 0
    winddirection: WindDirection = WindDirection.ERROR.value
    temperature: float = 0
    humidity: float = 0
    barpressure: float = 0
    altitude: float = 0
    daynight: DayNight = DayNight.ERROR.value


class DatapointRecord(DatapointData):
    """Datapoint as stored in the database

    Attributes:
        id: hex string of the document's ObjectId
        createdAt: time of creation, assigned by the database layer
        updatedAt: time of the last write, assigned by the database layer
    """

    id: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "DatapointRecord":
        """Builds record from a raw MongoDB document (with `_id`)."""
        values = {k: v for k, v in document.items() if k != "_id"}
        values["id"] = str(document["_id"])
        return cls.model_validate(values)

    def data(self) -> dict[str, Any]:
        """Returns only the client-settable fields."""
        return {field: getattr(self, field) for field in DATA_FIELDS}

    def transform(self) -> dict[str, Any]:
        """Projects the record to its public API representation."""
        return {field: getattr(self, field) for field in PUBLIC_FIELDS}
