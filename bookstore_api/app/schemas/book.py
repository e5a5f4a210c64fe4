"""
Pydantic schemas for books and their reviews.

``Book`` and ``Review`` mirror the records stored in the JSON catalog.
Field names are part of the file format and must not change.  Extra
keys found on a stored book are kept so that a load/save round trip
does not drop data written by other tools.
"""

from typing import List

from pydantic import BaseModel, Field


class Review(BaseModel):
    """A single user's review of a book."""

    username: str = Field(..., description="Owner of the review")
    review: str = Field(..., description="Review text")


class Book(BaseModel):
    """A catalog entry."""

    isbn: str = Field(..., example="0001")
    title: str = Field(..., example="Nineteen Eighty-Four")
    author: str = Field(..., example="George Orwell")
    reviews: List[Review] = Field(default_factory=list)

    model_config = {
        "extra": "allow",
    }


class ReviewUpdate(BaseModel):
    """Body of ``PUT /review/{isbn}``."""

    review: str = Field(..., example="A chilling classic.")


class ReviewList(BaseModel):
    """Reviews of one book."""

    reviews: List[Review]


class ReviewMutationResult(ReviewList):
    """Response of a review update or deletion."""

    message: str
