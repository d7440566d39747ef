# kitchen/app/presentation.py
"""
Page behaviour of the recipe generator, without a browser.

KitchenController owns what the single-page front end used to decide:
form validation, the subscription gate, the in-flight guard on the submit
button, the error banner, admin login and the admin settings form.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

from kitchen.app.context import AppContext
from kitchen.app.domain import messages
from kitchen.app.domain.errors import AuthenticationError
from kitchen.app.domain.models import (
    CUISINE_TYPES,
    DIETARY_OPTIONS,
    MEAL_TYPES,
    FilterInput,
    Recipe,
    SaveResult,
    SettingsEdit,
    SubmissionOutcome,
    coerce_settings_patch,
)
from kitchen.app.domain.session import AdminSession, SubscriptionGate
from kitchen.services.errors import GenerationError, RateLimitedError
from kitchen.services.generation import GenerationClient

logger = logging.getLogger(__name__)


@dataclass
class LoginOutcome:
    token: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.token is not None


class KitchenController:
    def __init__(
        self,
        context: AppContext,
        generator: GenerationClient,
        admin_session: AdminSession | None = None,
    ) -> None:
        self.context = context
        self.generator = generator
        self.admin_session = admin_session or AdminSession()
        self.gate = SubscriptionGate(context)
        self.recipe: Optional[Recipe] = None
        self.error: Optional[str] = None
        self._in_flight = threading.Lock()

    @property
    def is_loading(self) -> bool:
        return self._in_flight.locked()

    def is_admin(self, token: Optional[str]) -> bool:
        return self.admin_session.is_authenticated(token)

    def submit(self, form: FilterInput, token: Optional[str] = None) -> SubmissionOutcome:
        if not form.ingredients.strip():
            return SubmissionOutcome(status="invalid", error=messages.EMPTY_INGREDIENTS_MESSAGE)

        # Evaluated against whatever settings snapshot is current right now.
        settings = self.context.settings
        if not self.gate.allows_generation(self.is_admin(token)):
            return SubmissionOutcome(
                status="subscription_required",
                subscription_message=settings.subscriptionMessage,
                subscription_link=settings.subscriptionChannelLink,
            )

        if not self._in_flight.acquire(blocking=False):
            return SubmissionOutcome(status="busy", error=messages.BUSY_MESSAGE)

        try:
            self.error = None
            self.recipe = None
            try:
                self.recipe = self.generator.generate(form)
            except RateLimitedError as err:
                logger.warning("Recipe generation rate limited: %s", err.cause)
                self.error = messages.RATE_LIMITED_MESSAGE
                return SubmissionOutcome(status="error", error=self.error)
            except GenerationError as err:
                logger.error("Recipe generation failed: %s", err.cause)
                self.error = messages.GENERATION_FAILED_MESSAGE
                return SubmissionOutcome(status="error", error=self.error)
            return SubmissionOutcome(status="ok", recipe=self.recipe)
        finally:
            self._in_flight.release()

    def subscribe(self) -> None:
        self.gate.subscribe()

    def login(self, username: str, password: str) -> LoginOutcome:
        token = self.admin_session.login(username, password, self.context.settings)
        if token is None:
            logger.info("Rejected admin login for %r", username)
            return LoginOutcome(error=messages.LOGIN_FAILED_MESSAGE)
        return LoginOutcome(token=token)

    def logout(self, token: Optional[str]) -> None:
        self._require_admin(token)
        self.admin_session.logout()

    def _require_admin(self, token: Optional[str]) -> None:
        if not self.is_admin(token):
            raise AuthenticationError(messages.ADMIN_REQUIRED_MESSAGE)

    def public_view(self) -> dict[str, Any]:
        settings = self.context.settings
        return {
            "subscriptionMessage": settings.subscriptionMessage,
            "subscriptionChannelLink": settings.subscriptionChannelLink,
            "advertisements": [ad.model_dump() for ad in settings.displayable_ads],
            "isSubscribed": self.gate.is_subscribed,
            "cuisineTypes": CUISINE_TYPES,
            "mealTypes": MEAL_TYPES,
            "dietaryOptions": DIETARY_OPTIONS,
        }

    def admin_view(self, token: Optional[str]) -> dict[str, Any]:
        self._require_admin(token)
        return self.context.settings.model_dump(exclude={"adminPassword"})

    def save_settings(self, token: Optional[str], edits: SettingsEdit) -> SaveResult:
        self._require_admin(token)
        return self.context.save(edits)

    def export_settings(self, token: Optional[str]) -> dict[str, Any]:
        self._require_admin(token)
        return self.context.settings.remote_document()

    def import_settings(self, token: Optional[str], raw: Any) -> SaveResult:
        self._require_admin(token)
        patch = coerce_settings_patch(raw)
        return self.context.save(SettingsEdit.model_validate(patch))
