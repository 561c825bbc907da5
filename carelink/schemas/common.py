"""
Shared schema base and response envelope helpers
"""
from typing import Any, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged with clients using camelCase keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True
        from_attributes = True


def payload_of(model: BaseModel) -> dict:
    """Fields the client actually sent, keyed by their wire names"""
    return model.model_dump(by_alias=True, exclude_unset=True)


def serialize(schema: type, obj: Any) -> dict:
    """Render an ORM object through a response schema"""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def success(data: Any = None, message: Optional[str] = None) -> dict:
    body = {"status": "success"}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
