"""Observability setup: route standard logging records to logfire."""

import logging
from functools import lru_cache

import logfire

SERVICE_NAME = "kings-of-the-west"


@lru_cache(maxsize=1)
def configure_logfire() -> None:
    """
    Configure the logfire SDK once per process.

    Spans and logs are only shipped when a LOGFIRE_TOKEN is present, so local
    runs and tests stay offline. Console output is left to infra.logger.
    """
    logfire.configure(
        service_name=SERVICE_NAME,
        send_to_logfire="if-token-present",
        console=False,
    )
    logging.getLogger().addHandler(logfire.LogfireLoggingHandler())
