import logging
import math
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dpstore.api.internal.config import load_config_env, validate_config
from dpstore.api.internal.dp_logger import DPLogger
from dpstore.api.internal.helpers import request_source
from dpstore.api.routers import datapoint, root
from dpstore.common.config import HierarchicalDict
from dpstore.database.database import DatapointDatabase
from dpstore.database.exceptions import ConflictError, NotFoundError

DATAPOINT_URL_PREFIX = "/v1/datapoint"

uvicorn_logger = logging.getLogger("uvicorn")
uvicorn_access_logger = logging.getLogger("uvicorn.access")
gunicorn_error_logger = logging.getLogger("gunicorn.error")

log = logging.getLogger("API")


def setup_logging():
    """Routes root logger to the server's handlers."""
    if len(gunicorn_error_logger.handlers) > 0:  # We are running in gunicorn
        logging.root.handlers = gunicorn_error_logger.handlers
        uvicorn_access_logger.handlers = gunicorn_error_logger.handlers
    elif len(uvicorn_logger.handlers) > 0:  # We are running only in uvicorn
        logging.root.handlers = uvicorn_logger.handlers


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Rejects invalid request with 400, logging the bad input"""
    dp_logger: DPLogger = request.app.state.dp_logger
    errors = exc.errors()
    for err in errors:
        # Override empty input on json decode error with request data
        if err["type"] == "json_invalid":
            err["input"] = str(exc.body)
        # NaN and Infinity are not valid JSON
        elif isinstance(err.get("input"), float) and not math.isfinite(err["input"]):
            err["input"] = str(err["input"])
        dp_logger.log_bad(str(err), src=request_source(request))
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(errors)})


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def conflict_handler(request: Request, exc: ConflictError):
    log.info("Conflicting write on %s: %s", request.url.path, exc.errors)
    return JSONResponse(status_code=409, content={"detail": exc.message, "errors": exc.errors})


def create_app(
    config: HierarchicalDict, db: DatapointDatabase, root_path: str = ""
) -> FastAPI:
    """Builds the API application.

    Args:
        config: loaded configuration directory, `api` section is used
        db: database wrapper used by all handlers
        root_path: path prefix when served behind a proxy
    """
    api_config, _ = validate_config(config)

    app = FastAPI(root_path=root_path)
    app.state.db = db
    app.state.api_config = api_config
    app.state.dp_logger = DPLogger(api_config.datapoint_logger)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=api_config.cors.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(datapoint.router, prefix=DATAPOINT_URL_PREFIX, tags=["Datapoint"])
    app.include_router(root.router)

    if not api_config.auth.enabled:
        log.warning("Authorization is disabled, all requests are treated as admin requests.")

    return app


def app_from_env(environ: Optional[dict] = None) -> FastAPI:
    """App factory for uvicorn, configuration is read from `CONF_DIR`."""
    setup_logging()
    conf_env, config = load_config_env(environ)
    db = DatapointDatabase.from_config(config)
    return create_app(config, db, root_path=conf_env.ROOT_PATH)
