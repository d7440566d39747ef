from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from kitchen.app.deps import get_admin_token, get_controller
from kitchen.app.domain import messages
from kitchen.app.domain.models import SaveResult, SettingsEdit
from kitchen.app.presentation import KitchenController
from kitchen.app.schemas.admin import (
    AdminSettingsResponse,
    LoginRequest,
    LoginResponse,
    SaveResponse,
)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _save_response(result: SaveResult) -> SaveResponse:
    message = messages.SETTINGS_SAVED_MESSAGE if result.ok else messages.REMOTE_SYNC_FAILED_MESSAGE
    return SaveResponse.from_result(result, message)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    controller: KitchenController = Depends(get_controller),
):
    outcome = controller.login(payload.username, payload.password)
    if not outcome.ok:
        return JSONResponse(status_code=401, content={"message": outcome.error})
    return LoginResponse(token=outcome.token)


@router.post("/logout", status_code=204)
def logout(
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
) -> None:
    controller.logout(token)


@router.get("/settings", response_model=AdminSettingsResponse)
def read_settings(
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
) -> AdminSettingsResponse:
    return AdminSettingsResponse(**controller.admin_view(token))


@router.put("/settings", response_model=SaveResponse)
def save_settings(
    edits: SettingsEdit,
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
) -> SaveResponse:
    return _save_response(controller.save_settings(token, edits))


@router.get("/settings/export")
def export_settings(
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
) -> JSONResponse:
    return JSONResponse(
        content=controller.export_settings(token),
        headers={"Content-Disposition": 'attachment; filename="settings.json"'},
    )


@router.post("/settings/import", response_model=SaveResponse)
def import_settings(
    document: dict[str, Any] = Body(...),
    token: Optional[str] = Depends(get_admin_token),
    controller: KitchenController = Depends(get_controller),
) -> SaveResponse:
    return _save_response(controller.import_settings(token, document))
