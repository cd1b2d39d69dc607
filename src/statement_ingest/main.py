from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from statement_ingest import __version__
from statement_ingest.api.middleware.error_handler import (
    handle_generic_error,
    handle_statement_processing_error,
    handle_validation_error,
)
from statement_ingest.api.middleware.logging import RequestLoggingMiddleware
from statement_ingest.api.v1 import router as v1_router
from statement_ingest.api.v1.health import router as health_router
from statement_ingest.config import settings
from statement_ingest.core.exceptions import StatementProcessingError
from statement_ingest.core.logging import setup_logging


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title="Statement Ingest API",
        description="Bank statement parsing and import preview",
        version=__version__,
        debug=settings.debug,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Most specific first
    app.add_exception_handler(StatementProcessingError, handle_statement_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
