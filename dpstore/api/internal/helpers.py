from fastapi import Request

from dpstore.api.internal.config import ApiConfig
from dpstore.api.internal.dp_logger import DPLogger
from dpstore.database.database import DatapointDatabase


def get_db(request: Request) -> DatapointDatabase:
    """Dependency returning the database wrapper the app was created with"""
    return request.app.state.db


def get_dp_logger(request: Request) -> DPLogger:
    """Dependency returning the app's datapoint logger"""
    return request.app.state.dp_logger


def get_api_config(request: Request) -> ApiConfig:
    return request.app.state.api_config


def request_source(request: Request) -> str:
    """IP address of the client, for logging"""
    if request.client is None:
        return DPLogger.UNKNOWN_SRC_MSG
    return request.client.host
