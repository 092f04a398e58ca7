"""
User Pydantic Schemas

Both fields are optional at the schema level on purpose: a request with a
missing or empty field must get the service's own 400 "missing fields"
answer, which the handler raises, not a framework validation error.
"""

from pydantic import Field

from bookreview.schemas.common import CamelModel


class CredentialsRequest(CamelModel):
    """Body of POST /register and POST /customer/login."""

    username: str | None = Field(
        default=None,
        description="Username, unique across all users",
        examples=["alice"],
    )
    password: str | None = Field(
        default=None,
        description="Password, stored as given",
        examples=["pw1"],
    )

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)
