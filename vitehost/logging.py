import logging
from contextlib import contextmanager
from json import dumps as json_dumps
from logging import Formatter, StreamHandler, getLogger
from os import environ
from time import monotonic_ns

from click import secho

VERBOSITY_MAPPING = {
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class JsonFormatter(Formatter):
    def format(self, record):
        log_record = {
            "level": record.levelname,
            "name": record.name,
            "timestamp": self.formatTime(record, self.datefmt),
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json_dumps(log_record)


class ColorHandler(StreamHandler):
    def emit(self, record):
        try:
            msg = self.format(record)
            if record.levelno == logging.WARNING:
                secho(msg, fg="yellow")
            elif record.levelno >= logging.ERROR:
                secho(msg, fg="red")
            else:
                secho(msg)
        except Exception:
            self.handleError(record)


def setup_logger(name, log_level=logging.DEBUG):
    """
    Constructor for the loggers used by vitehost. Each record is written as one
    JSON object per line and colored by severity on the terminal:

    ```json
    {"level": "WARNING", "name": "vitehost.logging", "timestamp": "2026-10-19 09:12:01,112", "message": "Could not read manifest.json at web/out/.vite/manifest.json"}
    ```

    Production logs can then be filtered with standard tools:

    ```bash
    cat server.log | jq 'select(.level=="WARNING" or .level=="ERROR")'
    ```

    :param name: The name of the logger, typically the module name
    :param log_level: The logging level. Defaults to logging.DEBUG to log everything.

    :return: A configured logger instance

    """
    logger = getLogger(name)
    logger.setLevel(log_level)

    # Repeated setup only adjusts the level, so records are never printed twice
    handler = next(
        (
            existing
            for existing in logger.handlers
            if isinstance(existing, ColorHandler)
        ),
        None,
    )
    if handler is None:
        handler = ColorHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    handler.setLevel(log_level)

    return logger


@contextmanager
def log_time_duration(message: str):
    """
    Context manager to time a code block at runtime.

    ```python
    with log_time_duration("Load manifest"):
        manifest = load_manifest(path)
    ```

    """
    start = monotonic_ns()
    yield
    LOGGER.debug(f"{message} : Took {(monotonic_ns() - start) / 1e9:.2f}s")


def setup_internal_logger(name: str):
    """
    The package logger only surfaces warnings and above by default.

    To adjust, set the VITEHOST_LOG_LEVEL environment variable to one of
    DEBUG, INFO, WARNING or ERROR.

    """
    return setup_logger(
        name,
        log_level=VERBOSITY_MAPPING[environ.get("VITEHOST_LOG_LEVEL", "WARNING")],
    )


LOGGER = setup_internal_logger(__name__)
