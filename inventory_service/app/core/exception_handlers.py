import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode
from .exceptions import (
    DependencyError,
    InsufficientInventoryError,
    LedgerError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# exception type -> (http status, internal status code)
LEDGER_ERROR_MAP = {
    NotFoundError: (status.HTTP_404_NOT_FOUND, AppStatusCode.RECORD_NOT_FOUND),
    InsufficientInventoryError: (status.HTTP_400_BAD_REQUEST, AppStatusCode.INSUFFICIENT_INVENTORY),
    ValidationError: (status.HTTP_400_BAD_REQUEST, AppStatusCode.INVALID_INPUT),
    DependencyError: (status.HTTP_503_SERVICE_UNAVAILABLE, AppStatusCode.DEPENDENCY_FAILURE),
}


def setup_ledger_exception_handlers(app: FastAPI):

    @app.exception_handler(LedgerError)
    async def ledger_exception_handler(request: Request, exc: LedgerError):
        http_status, code = LEDGER_ERROR_MAP.get(
            type(exc), (status.HTTP_400_BAD_REQUEST, AppStatusCode.OPERATION_FAILED))

        if isinstance(exc, DependencyError):
            logger.error("Persistence failure on %s %s: %s",
                         request.method, request.url.path, exc)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=code,
            message=str(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=http_status)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s: %s",
                     request.method, request.url.path, exc)
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.DEPENDENCY_FAILURE,
            message="Database unavailable"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
