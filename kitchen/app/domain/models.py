# kitchen/app/domain/models.py
"""
Domain models for the recipe generator.
Recipes and filter inputs mirror the JSON exchanged with the generation API;
AppSettings is the single mutable settings document shared by the app.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

# Sentinel used by the cuisine and meal-type selectors for "no preference".
ANY_TYPE = "أي نوع"

CUISINE_TYPES = [
    ANY_TYPE,
    "عربي",
    "شامي",
    "مصري",
    "خليجي",
    "مغربي",
    "إيطالي",
    "هندي",
    "صيني",
    "مكسيكي",
    "تركي",
]

MEAL_TYPES = [
    ANY_TYPE,
    "فطور",
    "غداء",
    "عشاء",
    "وجبة خفيفة",
    "حلويات",
    "سلطة",
    "شوربة",
]

DIETARY_OPTIONS = [
    "نباتي",
    "نباتي صرف",
    "خالٍ من الغلوتين",
    "خالٍ من الألبان",
    "قليل الكربوهيدرات",
    "صحي",
]


class FilterInput(BaseModel):
    """What the user typed and picked in the recipe form."""
    ingredients: str = ""
    cuisine: str = ANY_TYPE
    mealType: str = ANY_TYPE
    dietaryOptions: list[str] = Field(default_factory=list)


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipeName: str
    description: str
    servings: str
    prepTime: str
    cookTime: str
    ingredients: list[str]
    instructions: list[str]


class Advertisement(BaseModel):
    imageUrl: str = ""
    text: str = ""
    linkUrl: str = ""

    @property
    def is_displayable(self) -> bool:
        return bool(self.imageUrl.strip() and self.text.strip() and self.linkUrl.strip())


DEFAULT_SUBSCRIPTION_MESSAGE = (
    "لإنشاء وصفات غير محدودة، يرجى الاشتراك في قناتنا أولاً! "
    "ستحصل على آخر التحديثات والوصفات المميزة."
)


def _default_advertisements() -> list[Advertisement]:
    return [
        Advertisement(
            imageUrl="https://picsum.photos/800/250",
            text="اكتشف عالماً من النكهات. انقر هنا لتصفح أحدث معدات المطبخ.",
            linkUrl="#",
        )
    ]


# Fields that only make sense locally; never written to the remote document.
LOCAL_ONLY_FIELDS = frozenset({"gistUrl", "githubToken"})


class AppSettings(BaseModel):
    """
    The settings document.

    Every field carries a built-in default, so an empty document is valid.
    The admin password and the gist token are kept in clear text.
    """
    model_config = ConfigDict(extra="ignore")

    subscriptionMessage: str = DEFAULT_SUBSCRIPTION_MESSAGE
    subscriptionChannelLink: str = "https://t.me/your_channel_link"
    advertisements: list[Advertisement] = Field(default_factory=_default_advertisements)
    adminUsername: str = "admin"
    adminPassword: str = "password123"
    gistUrl: str = ""
    githubToken: str = ""

    @property
    def has_remote(self) -> bool:
        return bool(self.gistUrl.strip())

    @property
    def can_sync(self) -> bool:
        return self.has_remote and bool(self.githubToken.strip())

    @property
    def displayable_ads(self) -> list[Advertisement]:
        return [ad for ad in self.advertisements if ad.is_displayable]

    def merged(self, patch: dict[str, Any]) -> "AppSettings":
        """Shallow merge: each key in ``patch`` replaces the whole field."""
        data = self.model_dump()
        data.update(patch)
        return AppSettings.model_validate(data)

    def remote_document(self) -> dict[str, Any]:
        return self.model_dump(exclude=set(LOCAL_ONLY_FIELDS))


_FIELD_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(field.annotation)
    for name, field in AppSettings.model_fields.items()
    if name != "advertisements"
}
_AD_ADAPTER = TypeAdapter(Advertisement)


def _coerce_advertisements(value: Any) -> Optional[list[Advertisement]]:
    if not isinstance(value, list):
        return None
    ads: list[Advertisement] = []
    for item in value:
        try:
            ads.append(_AD_ADAPTER.validate_python(item))
        except ValidationError:
            logger.warning("Dropping malformed advertisement entry: %r", item)
    return ads


def coerce_settings_patch(raw: Any) -> dict[str, Any]:
    """
    Validate a loosely-typed settings document field by field.

    Returns only known, well-formed top-level fields. Unknown keys and fields
    of the wrong type are dropped so they can never overwrite a good value.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Ignoring settings document that is not an object: %s", type(raw).__name__)
        return {}

    patch: dict[str, Any] = {}
    for key, value in raw.items():
        if key == "advertisements":
            ads = _coerce_advertisements(value)
            if ads is None:
                logger.warning("Dropping malformed settings field: advertisements")
                continue
            patch[key] = ads
            continue

        adapter = _FIELD_ADAPTERS.get(key)
        if adapter is None:
            continue
        try:
            patch[key] = adapter.validate_python(value, strict=True)
        except ValidationError:
            logger.warning("Dropping malformed settings field: %s", key)
    return patch


class SettingsEdit(BaseModel):
    """Fields submitted from the admin form; omitted fields are left alone."""
    model_config = ConfigDict(extra="ignore")

    subscriptionMessage: Optional[str] = None
    subscriptionChannelLink: Optional[str] = None
    advertisements: Optional[list[Advertisement]] = None
    adminUsername: Optional[str] = None
    adminPassword: Optional[str] = None
    gistUrl: Optional[str] = None
    githubToken: Optional[str] = None

    def to_patch(self, current: AppSettings) -> dict[str, Any]:
        patch = self.model_dump(exclude_none=True)
        # A blank password field means "keep the existing password".
        if not (self.adminPassword or "").strip():
            patch["adminPassword"] = current.adminPassword
        return patch


@dataclass
class SaveResult:
    """Outcome of an admin save; local and remote stages are reported apart."""
    settings: AppSettings
    local_saved: bool = False
    remote_attempted: bool = False
    remote_synced: bool = False
    remote_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.local_saved and (self.remote_synced or not self.remote_attempted)


SubmissionStatus = Literal["ok", "invalid", "subscription_required", "busy", "error"]


@dataclass
class SubmissionOutcome:
    """What the page shows after the user presses the generate button."""
    status: SubmissionStatus
    recipe: Optional[Recipe] = None
    error: Optional[str] = None
    subscription_message: Optional[str] = None
    subscription_link: Optional[str] = None
