"""
Base schema with the shared alias configuration.
"""

from pydantic import BaseModel, ConfigDict


class CamelSchema(BaseModel):
    """
    Base for schemas whose JSON keys are camelCase (``createdAt``, ``nameSeq``).

    Fields are declared in snake_case with an explicit alias; both spellings
    are accepted on input and the alias is used on output.
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)
