from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from dpstore.common.datapoint import DayNight, WindDirection


class HealthCheckResponse(BaseModel):
    """Healthcheck endpoint response"""

    detail: str = "It works!"


class ErrorResponse(BaseModel):
    """Generic error response"""

    detail: str


class FieldError(BaseModel):
    field: str
    location: str
    messages: list[str]


class ConflictResponse(BaseModel):
    """Duplicate key error response"""

    detail: str
    errors: list[FieldError]


class DatapointView(BaseModel):
    """Public representation of a datapoint"""

    id: str
    windspeed: float
    winddirection: WindDirection
    temperature: float
    humidity: float
    barpressure: float
    altitude: float
    daynight: DayNight
    createdAt: Optional[datetime] = None
