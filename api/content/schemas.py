"""
Content API schemas (request/response models).

Each kind has three models:
- `<Kind>Create`: the exact body accepted by POST (unknown fields rejected)
- `<Kind>Update`: the partial body accepted by PATCH
- `<Kind>`: the stored record as returned to clients
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Largest value of the PostgreSQL `integer` columns (ids, carousel rows).
INT4_MAX = 2_147_483_647


class CreateModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class UpdateModel(BaseModel):
    """
    Partial update body. Omitted fields are left alone; `null` is only
    accepted for columns listed in `nullable_fields`.
    """

    model_config = ConfigDict(extra="forbid")

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self) -> UpdateModel:
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Carousel images


class CarouselImageCreate(CreateModel):
    filename: str = Field(..., min_length=1)
    row: int = Field(..., ge=1, le=INT4_MAX)


class CarouselImageUpdate(UpdateModel):
    filename: str | None = Field(default=None, min_length=1)
    row: int | None = Field(default=None, ge=1, le=INT4_MAX)


class CarouselImage(BaseModel):
    id: int
    filename: str
    row: int
    index: int


# Testimonials


class TestimonialCreate(CreateModel):
    name: str = Field(..., min_length=1)
    designation: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class TestimonialUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=1)
    designation: str | None = Field(default=None, min_length=1)
    company: str | None = Field(default=None, min_length=1)
    image: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)


class Testimonial(BaseModel):
    id: int
    name: str
    designation: str
    company: str
    image: str
    content: str


# Promotional offers


class PromotionalOfferCreate(CreateModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    images: list[str] = Field(..., min_length=1)
    link: str | None = None


class PromotionalOfferUpdate(UpdateModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"link"})

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    images: list[str] | None = Field(default=None, min_length=1)
    link: str | None = None


class PromotionalOffer(BaseModel):
    id: int
    title: str
    description: str
    images: list[str]
    link: str | None = None


# Attorneys


class AttorneyCreate(CreateModel):
    name: str = Field(..., min_length=1)
    designation: str = Field(default="Attorney", min_length=1)
    image: str = Field(..., min_length=1)


class AttorneyUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=1)
    designation: str | None = Field(default=None, min_length=1)
    image: str | None = Field(default=None, min_length=1)


class Attorney(BaseModel):
    id: int
    name: str
    designation: str | None = None
    image: str


# Works


class WorkCreate(CreateModel):
    title: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)


class WorkUpdate(UpdateModel):
    title: str | None = Field(default=None, min_length=1)
    image: str | None = Field(default=None, min_length=1)


class Work(BaseModel):
    id: int
    title: str
    image: str


# Offers. Price is NUMERIC(10, 2); Decimal dumps to a JSON string.


class OfferCreate(CreateModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class OfferUpdate(UpdateModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class Offer(BaseModel):
    id: int
    title: str
    description: str
    price: Decimal


# Blogs


class BlogCreate(CreateModel):
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)


class BlogUpdate(UpdateModel):
    title: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    image: str | None = Field(default=None, min_length=1)


class Blog(BaseModel):
    id: int
    title: str
    author: str
    content: str
    image: str
    created_at: datetime
    updated_at: datetime
