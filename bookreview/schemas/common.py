"""
Shared schema pieces.

Responses use camelCase keys on the wire (totalBooks, bookTitle, ...)
while the Python side stays snake_case. FastAPI serializes response models
by alias, so declaring the alias generator once here is enough.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement; also the shape of every error body."""

    message: str = Field(
        ...,
        description="Human-readable outcome",
        examples=["User successfully logged in"],
    )
