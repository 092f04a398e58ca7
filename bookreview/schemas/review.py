"""
Review Pydantic Schemas

- ReviewListResponse: all reviews of one book (possibly none)
- ReviewWriteResponse: result of adding or replacing a review
- ReviewDeleteResponse: result of deleting a review
"""

from pydantic import Field

from bookreview.schemas.common import CamelModel


class ReviewListResponse(CamelModel):
    message: str
    book_title: str
    reviews: dict[str, str] = Field(
        ...,
        description="Review text keyed by username",
        examples=[{"alice": "Loved it"}],
    )
    review_count: int = Field(..., ge=0)


class ReviewWriteResponse(CamelModel):
    message: str
    review: str = Field(..., examples=["Loved it"])
    user: str = Field(..., examples=["alice"])


class ReviewDeleteResponse(CamelModel):
    message: str
    user: str = Field(..., examples=["alice"])
