"""Structured logging initialisation utilities."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

PACKAGE_LOGGER = "fieldmerge"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> Any:
    """Structlog logger bound to the stdlib logger ``name``.

    Events stay silent until the application configures logging.
    """
    return structlog.wrap_logger(logging.getLogger(name))


_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(),
]


def configure_logging(config_path: Path) -> None:
    """Configure stdlib and structlog logging using the YAML definition."""
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as handle:
            config: Dict[str, Any] = yaml.safe_load(handle)
        logging.config.dictConfig(config)
    else:
        logging.basicConfig(level=logging.INFO)
    structlog.configure(
        processors=_PROCESSORS,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
