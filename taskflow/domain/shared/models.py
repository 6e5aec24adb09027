"""Base model for domain entities.

Entities are stored under their Python field names and exposed on the
HTTP wire with camelCase aliases (``due_date`` -> ``dueDate``).
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Pydantic base with camelCase aliases that still accepts field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
