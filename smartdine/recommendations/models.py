from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Restaurant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = None
    cuisine: str | None = None
    price_range: str | None = Field(default=None, alias="priceRange")
    rating: float | None = None
    tags: str | None = None
    description: str | None = None
    embedding: str | None = Field(
        default=None,
        exclude=True,
        description="Serialized vector, e.g. [0.123456,-0.045678,...]",
    )


class RagRequest(BaseModel):
    query: str | None = None


class RagResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    best_restaurant: Restaurant | None = Field(default=None, alias="bestRestaurant")
    alternatives: list[Restaurant] = Field(default_factory=list)
    explanation: str = ""
