import logging
import sys

import structlog


def _service_name(app_name: str):
    def processor(logger, method_name, event_dict):
        event_dict.setdefault("service", app_name)
        return event_dict

    return processor


def init_logging(log_level: str = "INFO", app_name: str = "canary-service") -> structlog.BoundLogger:
    """Configure structlog over stdlib logging.

    Safe to call again: handlers are replaced and loggers are not cached, so
    module-level loggers pick up the latest level.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            _service_name(app_name),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer() if level == logging.DEBUG else structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )

    return structlog.get_logger()
