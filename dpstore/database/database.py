import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional, Union

import pymongo
from bson import ObjectId
from bson.codec_options import CodecOptions
from event_count_logger import DummyEventGroup, EventGroup
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from dpstore.common.config import HierarchicalDict
from dpstore.common.datapoint import DATA_FIELDS, LIST_FILTERS, DatapointData, DatapointRecord
from dpstore.database.config import MongoConfig, MongoStandaloneConfig
from dpstore.database.exceptions import ConflictError, DatabaseError, NotFoundError

EventGroupType = Union[EventGroup, DummyEventGroup]

# number of seconds to wait for the i-th attempt to reconnect after error
RECONNECT_DELAYS = [1, 2, 5, 10, 30]

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds, the precision MongoDB stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class DatapointDatabase:
    """
    MongoDB wrapper responsible for all persistence of datapoints.

    Every operation is a single document read or write on one collection,
    atomicity of concurrent requests is left to the database server.

    Args:
        collection: collection holding datapoint documents
        elog: event group counting performed writes
    """

    def __init__(self, collection: Collection, elog: Optional[EventGroupType] = None) -> None:
        self.log = logging.getLogger("DatapointDatabase")
        self.elog = elog or DummyEventGroup()
        self._col = collection

    @classmethod
    def from_config(
        cls, config: HierarchicalDict, elog: Optional[EventGroupType] = None
    ) -> "DatapointDatabase":
        """Connects to database configured in `database.yml` and initializes indexes."""
        log = logging.getLogger("DatapointDatabase")
        db_config = MongoConfig.model_validate(config.get("database", {}))

        log.info("Connecting to database...")
        for attempt, delay in enumerate(RECONNECT_DELAYS):
            try:
                client = cls.connect(db_config)
                # Check if connected
                client.admin.command("ping")
                break
            except pymongo.errors.ConnectionFailure as e:
                if attempt + 1 == len(RECONNECT_DELAYS):
                    raise DatabaseError(
                        "Cannot connect to database with specified connection arguments."
                    ) from e
                log.error(
                    "Cannot connect to database (attempt %d, retrying in %ds).",
                    attempt + 1,
                    delay,
                )
                time.sleep(delay)

        codec_opts = CodecOptions(tz_aware=True, tzinfo=timezone.utc)
        db = Database(client, db_config.db_name, codec_options=codec_opts)
        collection = db.get_collection(db_config.collection)
        collection.create_index([("createdAt", pymongo.DESCENDING)])

        log.info("Database successfully initialized!")
        return cls(collection, elog)

    @staticmethod
    def connect(config: MongoConfig) -> pymongo.MongoClient:
        if isinstance(config.connection, MongoStandaloneConfig):
            host = config.connection.host
            return pymongo.MongoClient(
                f"mongodb://{config.username}:{config.password}@{host.address}:{host.port}/",
                connectTimeoutMS=3000,
                serverSelectionTimeoutMS=5000,
            )
        else:
            uri = (
                f"mongodb://{config.username}:{config.password}@"
                + ",".join(f"{host.address}:{host.port}" for host in config.connection.hosts)
                + f"/?replicaSet={config.connection.replica_set}"
            )
            return pymongo.MongoClient(
                uri,
                replicaSet=config.connection.replica_set,
                connectTimeoutMS=3000,
                serverSelectionTimeoutMS=5000,
            )

    def get(self, datapoint_id: str) -> DatapointRecord:
        """Returns datapoint with `datapoint_id`.

        Raises `NotFoundError` if the id is not a valid ObjectId or there is no such datapoint.
        """
        document = None
        if ObjectId.is_valid(datapoint_id):
            document = self._col.find_one({"_id": ObjectId(datapoint_id)})
        if document is None:
            raise NotFoundError()
        return DatapointRecord.from_document(document)

    def list(
        self, page: int = DEFAULT_PAGE, per_page: int = DEFAULT_PER_PAGE, **filters: Any
    ) -> list[DatapointRecord]:
        """Lists datapoints in descending order of `createdAt` timestamp.

        Args:
            page: 1-based page number
            per_page: maximum number of datapoints on a page
            **filters: equality filters on `createdAt` or `windspeed`,
                `None` values and other keys are ignored
        """
        query = {k: v for k, v in filters.items() if v is not None and k in LIST_FILTERS}
        cursor = (
            self._col.find(query)
            .sort("createdAt", pymongo.DESCENDING)
            .skip(per_page * (page - 1))
            .limit(per_page)
        )
        return [DatapointRecord.from_document(doc) for doc in cursor]

    def create(self, data: dict[str, Any]) -> DatapointRecord:
        """Inserts new datapoint, fields missing in `data` get their defaults."""
        now = utc_now()
        document = DatapointData.model_validate(data).model_dump()
        document["createdAt"] = now
        document["updatedAt"] = now
        try:
            result = self._col.insert_one(document)
        except DuplicateKeyError as e:
            raise self.check_duplicate(e) from e
        document["_id"] = result.inserted_id
        self.log.debug("Created datapoint %s.", result.inserted_id)
        self.elog.log("datapoint_created")
        return DatapointRecord.from_document(document)

    def replace(self, record: DatapointRecord, data: dict[str, Any]) -> DatapointRecord:
        """Overwrites all data fields of `record` by `data`.

        Fields missing in `data` are reset to their defaults, id and `createdAt` are kept.
        Returns the document as stored afterwards.
        """
        oid = ObjectId(record.id)
        document = DatapointData.model_validate(data).model_dump()
        document["createdAt"] = record.createdAt or utc_now()
        document["updatedAt"] = utc_now()
        try:
            self._col.replace_one({"_id": oid}, document, upsert=True)
        except DuplicateKeyError as e:
            raise self.check_duplicate(e) from e
        self.log.debug("Replaced datapoint %s.", record.id)
        self.elog.log("datapoint_replaced")
        return self.get(record.id)

    def update(self, record: DatapointRecord, data: dict[str, Any]) -> DatapointRecord:
        """Merges data fields present in `data` into `record` and saves them."""
        changes = {field: data[field] for field in DATA_FIELDS if field in data}
        merged = DatapointRecord.model_validate(
            {**record.model_dump(), **changes, "updatedAt": utc_now()}
        )
        to_set = {field: getattr(merged, field) for field in changes}
        to_set["updatedAt"] = merged.updatedAt
        try:
            result = self._col.update_one({"_id": ObjectId(record.id)}, {"$set": to_set})
        except DuplicateKeyError as e:
            raise self.check_duplicate(e) from e
        if result.matched_count == 0:
            raise NotFoundError()
        self.log.debug("Updated datapoint %s (%s).", record.id, ", ".join(changes))
        self.elog.log("datapoint_updated")
        return merged

    def delete(self, record: DatapointRecord) -> None:
        """Deletes datapoint `record`."""
        result = self._col.delete_one({"_id": ObjectId(record.id)})
        if result.deleted_count == 0:
            raise NotFoundError()
        self.log.debug("Deleted datapoint %s.", record.id)
        self.elog.log("datapoint_removed")

    @staticmethod
    def check_duplicate(error: Exception) -> Exception:
        """Returns `ConflictError` if `error` is a duplicate key error, otherwise `error` itself.

        Conflicting fields are taken from the error details reported by the server.
        """
        if not isinstance(error, DuplicateKeyError):
            return error

        details = error.details or {}
        fields = list(details.get("keyValue") or details.get("keyPattern") or {})
        return ConflictError(
            "Validation Error",
            errors=[
                {
                    "field": field,
                    "location": "body",
                    "messages": [f'"{field}" already exists'],
                }
                for field in fields
            ],
        )
