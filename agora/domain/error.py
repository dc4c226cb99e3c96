"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ParentNotFoundError(NotFoundError):
    """Raised when a reply targets a parent comment that does not exist."""

    def __init__(self, parent_id: str):
        super().__init__("Parent comment", parent_id)


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the thread allows."""

    def __init__(self, parent_id: str, max_depth: int):
        self.parent_id = parent_id
        self.max_depth = max_depth
        super().__init__(
            f"Maximum reply depth of {max_depth} exceeded replying to {parent_id}"
        )


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class StorageUnavailableError(DomainError):
    """Raised when the underlying store is unreachable or failing."""

    def __init__(self, operation: str, cause: str | None = None):
        self.operation = operation
        message = f"Storage unavailable while {operation}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)
