# storefront/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    def to_json(self) -> dict:
        """Dump with wire (camelCase) keys and JSON-safe values"""
        return self.model_dump(by_alias=True, mode="json")
