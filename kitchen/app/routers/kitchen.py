from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from kitchen.app.deps import get_admin_token, get_controller
from kitchen.app.domain.messages import SUBSCRIPTION_TITLE
from kitchen.app.domain.models import FilterInput
from kitchen.app.presentation import KitchenController
from kitchen.app.schemas.kitchen import (
    KitchenView,
    SubmissionError,
    SubmissionResponse,
    SubscriptionRequired,
)

router = APIRouter(prefix="/api", tags=["kitchen"])

_STATUS_CODES = {
    "invalid": 422,
    "busy": 429,
    "error": 502,
}


@router.get("/kitchen", response_model=KitchenView)
def kitchen_view(controller: KitchenController = Depends(get_controller)) -> KitchenView:
    return KitchenView(**controller.public_view())


@router.post(
    "/recipes",
    response_model=SubmissionResponse,
    responses={
        403: {"model": SubscriptionRequired},
        422: {"model": SubmissionError},
        429: {"model": SubmissionError},
        502: {"model": SubmissionError},
    },
)
def submit_recipe(
    form: FilterInput,
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
):
    outcome = controller.submit(form, token=token)

    if outcome.status == "ok":
        return SubmissionResponse(recipe=outcome.recipe)

    if outcome.status == "subscription_required":
        body = SubscriptionRequired(
            title=SUBSCRIPTION_TITLE,
            message=outcome.subscription_message or "",
            link=outcome.subscription_link or "",
        )
        return JSONResponse(status_code=403, content=body.model_dump())

    return JSONResponse(
        status_code=_STATUS_CODES[outcome.status],
        content=SubmissionError(error=outcome.error or "").model_dump(),
    )


@router.post("/subscribe", status_code=204)
def subscribe(controller: KitchenController = Depends(get_controller)) -> None:
    controller.subscribe()
