class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InvalidTimeError(AppError):
    """Raised when a wall-clock value is not a well-formed HH:MM string."""
    def __init__(self, value: object):
        super().__init__(
            f"Invalid time value: {value!r} (expected HH:MM, 24-hour)",
            status_code=422,
            details={"value": str(value)},
        )

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with id {resource_id} not found",
            status_code=404,
            details={"resource": resource_type, "id": resource_id},
        )
