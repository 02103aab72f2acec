"""
Service-level errors

Services raise these directly; they are HTTPExceptions so FastAPI renders
them without per-router translation.
"""
from typing import Optional

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """A referenced submission, plan or reseller does not exist"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found: {entity_id}",
        )


class ConflictError(HTTPException):
    """A write would clash with another record, such as a duplicate email"""

    def __init__(self, message: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=message)


class SubmissionValidationError(HTTPException):
    """Malformed input caught before it reaches the database"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[{"field": field, "message": message}],
        )


class StorageError(HTTPException):
    """Database unavailable or a pymongo operation failed"""

    def __init__(self, message: str, unavailable: bool = False, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(
            status_code=(
                status.HTTP_503_SERVICE_UNAVAILABLE
                if unavailable
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            detail=message,
        )


class PredictionError(Exception):
    """Renewal likelihood prediction failed; never fatal to the caller"""
