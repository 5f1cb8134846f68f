"""Base model for ranking entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for languages, users and allocations.

    Entities are immutable; changes produce new instances via model_copy.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
