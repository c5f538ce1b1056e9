from pydantic import Field
from typing import Any, Optional, List, Union

from label_registry.schemas.base import CamelSchema
from label_registry.schemas.state import RegistryState, DerivedState


class Label(CamelSchema):
    id: int
    code: str
    # Older documents may lack these; missing keys stay missing on save.
    art: str = ""
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class LabelGenerateRequest(CamelSchema):
    count: Optional[int] = None
    # Non-string values are ignored and the default name is used.
    item: Any = None


class LabelUpdateRequest(CamelSchema):
    art: Optional[str] = None
    code: Optional[str] = None


class LabelGenerateResponse(CamelSchema):
    added: List[Label]
    state: Union[RegistryState, DerivedState]
