"""Spreadsheet task import endpoints."""

from __future__ import annotations

import logging
from pathlib import PurePath

from fastapi import APIRouter, Depends, File, Header, UploadFile
from fastapi.concurrency import run_in_threadpool

from taskdesk.api.dependencies import get_reconciler, get_settings
from taskdesk.core.config import AppSettings
from taskdesk.core.exceptions import UnauthorizedError, UnreadableWorkbookError
from taskdesk.models.tasks import ImportPreview, ImportReport, ImportRow
from taskdesk.task_import.reconciler import ImportReconciler
from taskdesk.task_import.spreadsheet_parser import parse_workbook

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

LOGIN_REQUIRED = "Bạn cần đăng nhập để thực hiện thao tác này"


async def _read_rows(file: UploadFile, settings: AppSettings) -> list[ImportRow]:
    suffix = PurePath(file.filename or "").suffix.lower()
    if suffix not in settings.task_import.allowed_extensions:
        logger.warning("Rejected upload %r: extension %r not allowed", file.filename, suffix)
        raise UnreadableWorkbookError()
    data = await file.read()
    return await run_in_threadpool(parse_workbook, data)


@router.post("/import/preview", response_model=ImportPreview)
async def preview_import(
    file: UploadFile = File(..., description="Workbook (.xlsx) with one task per row"),
    settings: AppSettings = Depends(get_settings),
) -> ImportPreview:
    """Parse the workbook and return the first rows without writing anything."""
    rows = await _read_rows(file, settings)
    return ImportPreview(total_rows=len(rows), rows=rows[: settings.task_import.preview_rows])


@router.post("/import", response_model=ImportReport)
async def import_tasks(
    file: UploadFile = File(..., description="Workbook (.xlsx) with one task per row"),
    x_user_id: str | None = Header(default=None),
    reconciler: ImportReconciler = Depends(get_reconciler),
    settings: AppSettings = Depends(get_settings),
) -> ImportReport:
    """Create one task per row; rows that fail are reported, not fatal.

    Structural problems (unreadable file, no rows, missing columns) reject the
    whole upload before any task is written.
    """
    if not x_user_id:
        raise UnauthorizedError(LOGIN_REQUIRED)

    rows = await _read_rows(file, settings)
    lookups = await run_in_threadpool(reconciler.load_lookups)
    return await run_in_threadpool(reconciler.reconcile, rows, lookups, x_user_id)
