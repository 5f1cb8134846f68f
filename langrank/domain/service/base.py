"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold rules that span several entities, such as budget
    validation reading a user's allocations for a language.
    """

    pass
