import logging
import pathlib
from typing import Any, Union

from dpstore.api.internal.config import DatapointLoggerConfig


class DPLogger:
    """Datapoint logger

    Logs accepted/rejected datapoint payloads into file for further analysis.
    Accepted payloads are logged in their processed form, rejected ones
    together with their error message.

    Logging may be disabled in `api.yml` configuration file:

    ```yml
    # ...
    datapoint_logger:
      good_log: false
      bad_log: false
    # ...
    ```

    """

    LOG_FORMATTER = logging.Formatter("%(asctime)s (%(src)s) | %(message)s")
    UNKNOWN_SRC_MSG = "UNKNOWN"

    def __init__(self, config: DatapointLoggerConfig):
        self._good_logger = self.setup_logger("GOOD", config.good_log)
        self._bad_logger = self.setup_logger("BAD", config.bad_log)

    def setup_logger(self, name: str, log_file: Union[str, bool]):
        """Creates new logger instance with `log_file` as target"""
        logger = logging.getLogger(f"DPLogger.{name}")

        # Loggers are process-wide, an app built again must not duplicate handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        if log_file:
            parent_path = pathlib.Path(log_file).parent
            if not parent_path.exists():
                raise FileNotFoundError(
                    f"The directory {parent_path} does not exist,"
                    " check the configured path or create the directory."
                )
            log_handler = logging.FileHandler(log_file)
            log_handler.setFormatter(self.LOG_FORMATTER)
        else:
            log_handler = logging.NullHandler()

        logger.addHandler(log_handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

        return logger

    def log_good(self, dp: dict[str, Any], src: str = UNKNOWN_SRC_MSG):
        """Logs accepted datapoint

        Source should be IP address of incoming request.
        """
        self._good_logger.info(dp, extra={"src": src})

    def log_bad(self, validation_error_msg: str, src: str = UNKNOWN_SRC_MSG):
        """Logs validation error message, which includes bad input

        Should be called for each individual error.
        Source should be IP address of incoming request.
        """
        self._bad_logger.info(validation_error_msg, extra={"src": src})
