"""Canonical catalogue shapes stored in the cache.

Every cached catalogue value is one of these models dumped to JSON. They are
built from aggregates in exactly one place (``from_aggregate``) and any
external representation is derived from them at the boundary.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CategoryView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str
    image_url: str | None = None
    is_active: bool = True
    display_order: int = 0

    @classmethod
    def from_aggregate(cls, category) -> CategoryView:
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            image_url=category.image_url,
            is_active=bool(category.is_active),
            display_order=category.display_order or 0,
        )


class ProductView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    slug: str
    description: str | None = None
    price: float
    compare_at_price: float | None = None
    category_id: str | None = None
    is_active: bool = True

    @classmethod
    def from_aggregate(cls, product) -> ProductView:
        return cls(
            id=str(product.id),
            title=product.title,
            slug=product.slug,
            description=product.description,
            price=float(product.price),
            compare_at_price=product.compare_at_price,
            category_id=str(product.category_id) if product.category_id else None,
            is_active=bool(product.is_active),
        )


def _empty_breakdown() -> dict[str, int]:
    return {str(score): 0 for score in range(5, 0, -1)}


class RatingSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    average_rating: float = 0.0
    total_ratings: int = 0
    breakdown: dict[str, int] = Field(default_factory=_empty_breakdown)

    @classmethod
    def from_scores(cls, product_id: str, scores: list[int]) -> RatingSummary:
        breakdown = _empty_breakdown()
        for score in scores:
            breakdown[str(score)] += 1
        total = len(scores)
        average = round(sum(scores) / total, 2) if total else 0.0
        return cls(product_id=str(product_id), average_rating=average, total_ratings=total, breakdown=breakdown)
