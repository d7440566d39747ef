from __future__ import annotations

from pydantic import BaseModel, Field

from kitchen.app.domain.models import Advertisement, Recipe


class KitchenView(BaseModel):
    subscriptionMessage: str
    subscriptionChannelLink: str
    advertisements: list[Advertisement] = Field(default_factory=list)
    isSubscribed: bool
    cuisineTypes: list[str]
    mealTypes: list[str]
    dietaryOptions: list[str]


class SubscriptionRequired(BaseModel):
    title: str
    message: str
    link: str


class SubmissionError(BaseModel):
    error: str


class SubmissionResponse(BaseModel):
    recipe: Recipe
