from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from kitchen.app.domain.models import Advertisement, SaveResult


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str


class AdminSettingsResponse(BaseModel):
    subscriptionMessage: str
    subscriptionChannelLink: str
    advertisements: list[Advertisement]
    adminUsername: str
    gistUrl: str
    githubToken: str


class SaveResponse(BaseModel):
    message: str
    localSaved: bool
    remoteAttempted: bool
    remoteSynced: bool
    remoteError: Optional[str] = None
    gistUrl: str

    @classmethod
    def from_result(cls, result: SaveResult, message: str) -> "SaveResponse":
        return cls(
            message=message,
            localSaved=result.local_saved,
            remoteAttempted=result.remote_attempted,
            remoteSynced=result.remote_synced,
            remoteError=result.remote_error,
            gistUrl=result.settings.gistUrl,
        )
