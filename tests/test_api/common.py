import unittest
from typing import Optional

import httpx
import mongomock
from fastapi.testclient import TestClient

from dpstore.api.main import create_app
from dpstore.common.config import HierarchicalDict
from dpstore.database.database import DatapointDatabase

DATAPOINT_PATH = "/v1/datapoint"

ADMIN_TOKEN = "admin-token"
USER_TOKEN = "user-token"

ACCEPTED_ERROR_CODES = {400}


def make_config(auth_enabled: bool = False) -> HierarchicalDict:
    return HierarchicalDict(
        {
            "database": {
                "db_name": "dpstore_test",
                "connection": {"mode": "standalone"},
            },
            "api": {
                "auth": {
                    "enabled": auth_enabled,
                    "tokens": {
                        ADMIN_TOKEN: {"id": "operator", "role": "admin"},
                        USER_TOKEN: {"id": "station-1", "role": "user"},
                    },
                },
            },
        }
    )


class APITest(unittest.TestCase):
    """Runs the app in-process against an in-memory collection."""

    auth_enabled = False

    def setUp(self) -> None:
        self.collection = mongomock.MongoClient().dpstore_test.datapoints
        self.collection.delete_many({})
        self.db = DatapointDatabase(self.collection)
        self.client = self.make_client(self.db)

    def make_client(self, db: DatapointDatabase, **kwargs) -> TestClient:
        app = create_app(make_config(self.auth_enabled), db)
        return TestClient(app, **kwargs)

    def url(self, datapoint_id: Optional[str] = None) -> str:
        if datapoint_id is None:
            return f"{DATAPOINT_PATH}/"
        return f"{DATAPOINT_PATH}/{datapoint_id}"

    def create_datapoint(self, **fields) -> dict:
        response = self.client.post(self.url(), json=fields)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def assertRejected(self, response: httpx.Response):
        self.assertIn(response.status_code, ACCEPTED_ERROR_CODES, response.text)
