"""Base model for livemap records and results.

Every model inherits from :class:`LiveMapBaseModel` which provides:

* ``frozen=True`` so records handed out of the store cannot be mutated.
* ``alias_generator=to_camel`` so the JSON wire shape uses camelCase
  (``subjectId``, ``lastUpdated``) while Python code uses snake_case.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LiveMapBaseModel(BaseModel):
    """Base for immutable livemap models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)
