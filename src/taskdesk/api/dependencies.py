"""Request-scoped accessors for services built in the app lifespan."""

from __future__ import annotations

from fastapi import Request

from taskdesk.bootstrap.provisioner import AdminProvisioner
from taskdesk.bootstrap.rate_limiter import FixedWindowRateLimiter
from taskdesk.core.config import AppSettings
from taskdesk.task_import.reconciler import ImportReconciler


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    return request.app.state.rate_limiter


def get_provisioner(request: Request) -> AdminProvisioner:
    return request.app.state.provisioner


def get_reconciler(request: Request) -> ImportReconciler:
    return request.app.state.reconciler


def client_address(request: Request) -> str:
    """Best-known caller address: proxy headers first, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
