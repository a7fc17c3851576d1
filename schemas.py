from datetime import date
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MIN_PUBLICATION_YEAR = 1900

T = TypeVar("T")


class ApiModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CreateBookRequest(ApiModel):
    isbn: str = Field(min_length=14, max_length=17)
    title: str = Field(min_length=1, max_length=200)
    author: str = Field(min_length=1, max_length=100)
    publication_year: int = 0
    amount_available: int = Field(default=0, ge=0)

    @field_validator("publication_year")
    @classmethod
    def check_publication_year(cls, value: int) -> int:
        """0 means the year is unknown; anything else must fall in 1900..this year."""
        if value == 0:
            return value
        current_year = date.today().year
        if value < MIN_PUBLICATION_YEAR or value > current_year:
            raise ValueError(
                f"PublicationYear must be between {MIN_PUBLICATION_YEAR} and {current_year}."
            )
        return value


class BookResponse(ApiModel):
    id: int
    title: str
    author: str
    isbn: str
    publication_year: int
    amount_available: int


class LendResponse(ApiModel):
    new_amount: int
    name_of_the_book: str


class PagedResult(ApiModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int


class ErrorResponse(BaseModel):
    error: str
