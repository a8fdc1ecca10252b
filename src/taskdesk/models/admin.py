"""Admin bootstrap request, result, and response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AdminCandidate(BaseModel):
    """Validated bootstrap request. Never persisted as-is."""

    email: str
    password: str = Field(repr=False)
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or "Admin"


class ProvisionedAdmin(BaseModel):
    """Account that now holds the admin role."""

    user_id: str
    email: str


class ProvisionResult(BaseModel):
    """Outcome of a provisioning run.

    ``admin`` is the hard result: the account and its credentials exist.
    ``warnings`` collects best-effort steps (password repair, profile, role)
    that failed without failing the run.
    """

    admin: ProvisionedAdmin
    created: bool = True
    warnings: list[str] = Field(default_factory=list)


class AccountRecord(BaseModel):
    """Account as reported by the external account service."""

    id: str
    email: Optional[str] = None
    username: str = ""


class BootstrapUser(BaseModel):
    id: str
    email: str


class BootstrapResponse(BaseModel):
    """Success body of POST /bootstrap."""

    success: bool = True
    message: str = "Admin user created successfully"
    user: BootstrapUser
    warnings: list[str] = Field(default_factory=list)
