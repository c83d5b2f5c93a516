class DomainError(Exception):
    """Base exception class for all domain-specific exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(DomainError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message)


class ValidationError(DomainError):
    """Exception raised when validation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DuplicateRecordError(DomainError):
    """Exception raised when an insert collides with a unique constraint."""

    def __init__(self, resource_type: str, detail: str | None = None) -> None:
        self.resource_type = resource_type
        super().__init__(detail or f"{resource_type} already exists")


class StoreUnavailableError(DomainError):
    """Exception raised when the record store cannot complete a read or write."""

    def __init__(self, operation: str, table: str) -> None:
        self.operation = operation
        self.table = table
        super().__init__(f"Record store failed during {operation} on {table}")
