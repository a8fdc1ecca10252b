"""First-admin bootstrap endpoint."""

from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool

from taskdesk.api.dependencies import client_address, get_provisioner, get_rate_limiter, get_settings
from taskdesk.bootstrap.provisioner import AdminProvisioner
from taskdesk.bootstrap.rate_limiter import FixedWindowRateLimiter
from taskdesk.bootstrap.validators import INVALID_BODY, validate_admin_request
from taskdesk.core.config import AppSettings
from taskdesk.core.exceptions import (
    AdminExistsError,
    InvalidRequestError,
    RateLimitedError,
    UnauthorizedError,
)
from taskdesk.models.admin import BootstrapResponse, BootstrapUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bootstrap"])


def _token_matches(provided: str | None, expected: str) -> bool:
    return hmac.compare_digest((provided or "").encode(), expected.encode())


@router.options("/bootstrap", include_in_schema=False)
async def bootstrap_preflight() -> Response:
    return Response(status_code=200)


@router.post("/bootstrap", response_model=BootstrapResponse)
async def bootstrap_admin(
    request: Request,
    limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
    provisioner: AdminProvisioner = Depends(get_provisioner),
    settings: AppSettings = Depends(get_settings),
) -> BootstrapResponse:
    """Create the first admin account.

    Gate order: rate limit, bootstrap token (only when configured), existing
    admin, then body validation. An existing admin is reported before the
    body is even read. Store and account-service calls block, so they run
    in the threadpool.
    """
    address = client_address(request)

    if await run_in_threadpool(limiter.is_limited, address):
        logger.warning("Rate limit exceeded for IP: %s", address)
        raise RateLimitedError(address)

    if settings.bootstrap.token and not _token_matches(
        request.headers.get("x-bootstrap-token"), settings.bootstrap.token
    ):
        logger.warning("Invalid bootstrap token attempt from IP: %s", address)
        raise UnauthorizedError()

    try:
        await run_in_threadpool(provisioner.ensure_no_admin)
    except AdminExistsError:
        logger.warning("Bootstrap admin attempted when admin already exists. IP: %s", address)
        raise

    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidRequestError(INVALID_BODY) from exc

    candidate = validate_admin_request(payload)
    logger.info("Creating first admin user: %s, IP: %s", candidate.email, address)

    result = await run_in_threadpool(provisioner.provision, candidate, checked=True)
    return BootstrapResponse(
        user=BootstrapUser(id=result.admin.user_id, email=result.admin.email),
        warnings=result.warnings,
    )
