from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from dpstore.api.internal.auth import ADMIN, LOGGED_USER
from dpstore.api.internal.dp_logger import DPLogger
from dpstore.api.internal.helpers import get_db, get_dp_logger, request_source
from dpstore.api.internal.models import DatapointBody, DatapointId, DatapointListQuery
from dpstore.api.internal.response_models import ConflictResponse, DatapointView, ErrorResponse
from dpstore.common.datapoint import DatapointRecord
from dpstore.database.database import DatapointDatabase

Database = Annotated[DatapointDatabase, Depends(get_db)]
Logger = Annotated[DPLogger, Depends(get_dp_logger)]


def load_datapoint(datapointId: DatapointId, db: Database) -> DatapointRecord:
    """Resolves `datapointId` path parameter to the stored datapoint.

    Raises `NotFoundError` (404) when there is no such datapoint.
    """
    return db.get(datapointId)


LoadedDatapoint = Annotated[DatapointRecord, Depends(load_datapoint)]

NOT_FOUND = {404: {"description": "Datapoint does not exist", "model": ErrorResponse}}
CONFLICT = {409: {"description": "Duplicate key", "model": ConflictResponse}}

router = APIRouter()


@router.get("/", dependencies=[Depends(ADMIN)])
def list_datapoints(
    query: Annotated[DatapointListQuery, Query()], db: Database
) -> list[DatapointView]:
    """List datapoints

    Newest first (by `createdAt`), `perPage` datapoints on a `page`.
    Datapoints may be filtered by exact value of `createdAt` or any data field.
    """
    datapoints = db.list(page=query.page, per_page=query.perPage, **query.filters())
    return [dp.transform() for dp in datapoints]


@router.post("/", status_code=201, dependencies=[Depends(ADMIN)], responses=CONFLICT)
def create_datapoint(
    body: DatapointBody, db: Database, dp_logger: Logger, request: Request
) -> DatapointView:
    """Create datapoint

    Fields not present in body get their default values.
    """
    datapoint = db.create(body.data())
    dp_logger.log_good(datapoint.transform(), src=request_source(request))
    return datapoint.transform()


@router.get("/{datapointId}", dependencies=[Depends(LOGGED_USER)], responses=NOT_FOUND)
def get_datapoint(datapoint: LoadedDatapoint) -> DatapointView:
    """Get datapoint"""
    return datapoint.transform()


@router.put(
    "/{datapointId}", dependencies=[Depends(LOGGED_USER)], responses=NOT_FOUND | CONFLICT
)
def replace_datapoint(
    datapoint: LoadedDatapoint,
    body: DatapointBody,
    db: Database,
    dp_logger: Logger,
    request: Request,
) -> DatapointView:
    """Replace datapoint

    Replaces the whole datapoint, fields not present in body are reset to their defaults.
    """
    saved = db.replace(datapoint, body.data())
    dp_logger.log_good(saved.transform(), src=request_source(request))
    return saved.transform()


@router.patch(
    "/{datapointId}", dependencies=[Depends(LOGGED_USER)], responses=NOT_FOUND | CONFLICT
)
def update_datapoint(
    datapoint: LoadedDatapoint,
    body: DatapointBody,
    db: Database,
    dp_logger: Logger,
    request: Request,
) -> DatapointView:
    """Update datapoint

    Only fields present in body are changed.
    """
    saved = db.update(datapoint, body.data())
    dp_logger.log_good(saved.transform(), src=request_source(request))
    return saved.transform()


@router.delete(
    "/{datapointId}", status_code=204, dependencies=[Depends(LOGGED_USER)], responses=NOT_FOUND
)
def remove_datapoint(datapoint: LoadedDatapoint, db: Database) -> Response:
    """Delete datapoint"""
    db.delete(datapoint)
    return Response(status_code=204)
