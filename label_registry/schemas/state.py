from pydantic import Field
from typing import Optional

from label_registry.schemas.base import CamelSchema


class RegistryState(CamelSchema):
    """Persisted counter used in stored mode."""

    prefix: str
    digits: int = Field(ge=0)
    next: int = Field(ge=0)


class DerivedState(CamelSchema):
    """State recomputed from the labels on every read (derived mode)."""

    prefix: str
    digits: int
    next: int
    name_seq: int = Field(alias="nameSeq")


class StatePatchRequest(CamelSchema):
    # Numbers are accepted as floats so non-finite values can be rejected
    # with a domain error instead of a parsing error.
    prefix: Optional[str] = None
    digits: Optional[float] = None
    next: Optional[float] = None
