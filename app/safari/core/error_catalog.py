from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    TABLE_NOT_FOUND = ErrorDefinition(
        "TABLE_NOT_FOUND",
        "Table not found",
        status.HTTP_404_NOT_FOUND,
    )
    RECORD_NOT_FOUND = ErrorDefinition(
        "RECORD_NOT_FOUND",
        "Record not found",
        status.HTTP_404_NOT_FOUND,
    )
    BULK_ACTION_NOT_SUPPORTED = ErrorDefinition(
        "BULK_ACTION_NOT_SUPPORTED",
        "Bulk action not supported for this table",
        status.HTTP_400_BAD_REQUEST,
    )
    MUTATION_FAILED = ErrorDefinition(
        "MUTATION_FAILED",
        "Record mutation failed",
        status.HTTP_409_CONFLICT,
    )
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)
