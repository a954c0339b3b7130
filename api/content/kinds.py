"""
The seven entity kinds served by the generic content handler.

An `EntityKind` is everything the handler needs to know about a kind:
its route prefix, its table, its schemas and which fields name files in
the Blob Store.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from . import schemas
from .repository import Table


@dataclass(frozen=True)
class EntityKind:
    slug: str
    label: str
    table: Table
    create_schema: type[schemas.CreateModel]
    update_schema: type[schemas.UpdateModel]
    read_schema: type[BaseModel]
    # Fields holding a blob name or a list of blob names.
    blob_fields: tuple[str, ...] = ()


CAROUSEL_IMAGES = EntityKind(
    slug="carousel-images",
    label="Carousel image",
    table=Table(name="carousel_images", columns=("filename", "row")),
    create_schema=schemas.CarouselImageCreate,
    update_schema=schemas.CarouselImageUpdate,
    read_schema=schemas.CarouselImage,
    blob_fields=("filename",),
)

TESTIMONIALS = EntityKind(
    slug="testimonials",
    label="Testimonial",
    table=Table(
        name="testimonials",
        columns=("name", "designation", "company", "image", "content"),
    ),
    create_schema=schemas.TestimonialCreate,
    update_schema=schemas.TestimonialUpdate,
    read_schema=schemas.Testimonial,
    blob_fields=("image",),
)

PROMOTIONAL_OFFERS = EntityKind(
    slug="promotional-offers",
    label="Promotional offer",
    table=Table(
        name="promotional_offers",
        columns=("title", "description", "images", "link"),
        json_columns=frozenset({"images"}),
    ),
    create_schema=schemas.PromotionalOfferCreate,
    update_schema=schemas.PromotionalOfferUpdate,
    read_schema=schemas.PromotionalOffer,
    blob_fields=("images",),
)

ATTORNEYS = EntityKind(
    slug="attorneys",
    label="Attorney",
    table=Table(name="attorneys", columns=("name", "designation", "image")),
    create_schema=schemas.AttorneyCreate,
    update_schema=schemas.AttorneyUpdate,
    read_schema=schemas.Attorney,
    blob_fields=("image",),
)

WORKS = EntityKind(
    slug="works",
    label="Work",
    table=Table(name="works", columns=("title", "image")),
    create_schema=schemas.WorkCreate,
    update_schema=schemas.WorkUpdate,
    read_schema=schemas.Work,
    blob_fields=("image",),
)

OFFERS = EntityKind(
    slug="offers",
    label="Offer",
    table=Table(name="offers", columns=("title", "description", "price")),
    create_schema=schemas.OfferCreate,
    update_schema=schemas.OfferUpdate,
    read_schema=schemas.Offer,
)

BLOGS = EntityKind(
    slug="blogs",
    label="Blog",
    table=Table(
        name="blogs",
        columns=("title", "author", "content", "image"),
        touch_column="updated_at",
    ),
    create_schema=schemas.BlogCreate,
    update_schema=schemas.BlogUpdate,
    read_schema=schemas.Blog,
    blob_fields=("image",),
)

ALL_KINDS: tuple[EntityKind, ...] = (
    CAROUSEL_IMAGES,
    TESTIMONIALS,
    PROMOTIONAL_OFFERS,
    ATTORNEYS,
    WORKS,
    OFFERS,
    BLOGS,
)
