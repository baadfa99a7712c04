from fastapi import HTTPException, status

# Domain exceptions raised by the services; the HTTP layer renders them
class NotFoundError(HTTPException):
    def __init__(self, resource: str, field: str = "id", value=None):
        detail = f"{resource} not found with {field}: {value}" if value is not None else f"{resource} not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )

class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )

class ValidationFailedError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

class StoreError(HTTPException):
    """A store operation failed; the transaction has been rolled back."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )

def store_error_reason(exc: Exception) -> str:
    """Underlying DB-API message of a SQLAlchemy error, or the error itself."""
    return str(getattr(exc, "orig", None) or exc)
