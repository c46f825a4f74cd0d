"""
OpenTelemetry instrumentation for FastAPI and the MongoDB driver.
Span export is left to the OpenTelemetry SDK/collector configured in the environment.
"""

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

from app.core.config import config
from app.core.logger import logger


def instrument_app(app):
    """
    Instrument the FastAPI application and PyMongo (used under Motor).
    Instrumentation failures are logged and never stop the service.
    """
    if not config.enable_telemetry:
        logger.info("OpenTelemetry instrumentation disabled", metadata={"event": "telemetry_disabled"})
        return

    try:
        FastAPIInstrumentor.instrument_app(app)
        PymongoInstrumentor().instrument()
        logger.info("OpenTelemetry instrumentation complete", metadata={"event": "telemetry_enabled"})
    except Exception as e:
        logger.error("Failed to instrument application", error=e, metadata={"event": "telemetry_error"})
