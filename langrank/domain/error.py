"""Domain layer errors.

Budget rejections are not errors: validators return a BudgetDecision and the
vote service turns it into a VoteRejected result.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Raised when an operation requires a signed-in user."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class TransientStoreError(DomainError):
    """Raised when the store failed in a way a retry may fix."""

    pass


class ConcurrencyConflictError(TransientStoreError):
    """Raised when a conditional append lost a race against another write."""

    pass
