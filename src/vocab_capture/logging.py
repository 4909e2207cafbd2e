import logging
import sys

from pythonjsonlogger import jsonlogger

_SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def setup_logging():
    """
    Configures structured JSON logging for the application.

    Installs a single stdout handler with a JSON formatter carrying the
    timestamp, level, logger name, message and the Datadog trace_id/span_id
    on the root logger and on the uvicorn loggers, so API access logs and
    pipeline logs share one format. Context is passed through ``extra``.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(logger_name)
        server_logger.setLevel(logging.INFO)
        server_logger.handlers = [stream_handler]
        server_logger.propagate = False

    return root_logger
