import os
import sys
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ValidationError, field_validator

from dpstore.common.config import HierarchicalDict, read_config_dir
from dpstore.database.config import MongoConfig


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class TokenOwner(BaseModel, extra="forbid"):
    """Caller identity resolved from an access token."""

    id: str
    role: Role = Role.USER


class AuthConfig(BaseModel, extra="forbid"):
    """Access tokens accepted by the API, mapped to their owners."""

    enabled: bool = True
    tokens: dict[str, TokenOwner] = {}


class CorsConfig(BaseModel, extra="forbid"):
    allow_origins: list[str] = ["*"]


class DatapointLoggerConfig(BaseModel, extra="forbid"):
    """Target files of the datapoint logger, `False` disables the log."""

    good_log: Union[str, bool] = False
    bad_log: Union[str, bool] = False


class ApiConfig(BaseModel, extra="forbid"):
    """API configuration (content of `api.yml`)."""

    cors: CorsConfig = CorsConfig()
    auth: AuthConfig = AuthConfig()
    datapoint_logger: DatapointLoggerConfig = DatapointLoggerConfig()


def validate_config(config: HierarchicalDict) -> tuple[ApiConfig, MongoConfig]:
    """Validates loaded configuration, raises `ValueError` or pydantic's `ValidationError`."""
    if "database" not in config:
        raise ValueError("Config for 'database' is missing")
    db_config = MongoConfig.model_validate(config.get("database"))
    api_config = ApiConfig.model_validate(config.get("api", None) or {})
    return api_config, db_config


class ConfigEnv(BaseModel):
    """Configuration environment variables container"""

    APP_NAME: str = "dpstore"
    CONF_DIR: str
    ROOT_PATH: str = ""

    @field_validator("CONF_DIR")
    @classmethod
    def validate_conf_dir(cls, v):
        # Try to open config
        try:
            config = read_config_dir(v, recursive=True)
        except OSError as e:
            raise ValueError(f"Cannot open: {v}") from e

        # This may raise ValueError too
        validate_config(config)

        return v


def load_config_env(environ: Optional[dict] = None) -> tuple[ConfigEnv, HierarchicalDict]:
    """Parses environment variables and loads configuration from `CONF_DIR`.

    Prints errors and exits the process when the environment or configuration is invalid.
    """
    try:
        conf_env = ConfigEnv.model_validate(dict(os.environ) if environ is None else environ)
    except ValidationError as e:
        # Errors of `validate_conf_dir` are value errors, the rest are bad variables
        config_error = any(x["type"] == "value_error" for x in e.errors())
        env_error = any(x["type"] != "value_error" for x in e.errors())
        print(
            ("Invalid or missing environmental variables" if env_error else "")
            + (" && " if env_error and config_error else "")
            + ("Invalid configuration (check database.yml and api.yml)" if config_error else "")
            + ":",
            file=sys.stderr,
        )

        error_message_no_first_line = str(e).split("\n", 1)[-1]
        print(error_message_no_first_line, file=sys.stderr)

        sys.exit(1)

    return conf_env, read_config_dir(conf_env.CONF_DIR, recursive=True)
