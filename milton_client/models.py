"""Payload models exchanged with the Milton device service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Role(_Payload):
    """Role granted to an authenticated user."""

    id: str
    name: str


class UserDetails(_Payload):
    """Profile details of an authenticated user."""

    user_id: str
    picture: str | None = None
    nickname: str | None = None
    email: str | None = None


class UserInfo(_Payload):
    """Identity attached to a logged-in session."""

    roles: list[Role] = Field(default_factory=list)
    user: UserDetails


class IdentifyResponse(_Payload):
    """Body of the identity check endpoint."""

    ok: bool
    timestamp: str
    session: UserInfo | None = None


class JobFile(_Payload):
    name: str | None = None


class Job(_Payload):
    file: JobFile


class Progress(_Payload):
    completion: float | None = None


class DeviceStatus(_Payload):
    """Print job summary reported by the device's control endpoint."""

    job: Job
    progress: Progress
    state: str


class PrinterModel(_Payload):
    """Everything the printer view needs to render."""

    status: DeviceStatus
    snapshot_url: str
