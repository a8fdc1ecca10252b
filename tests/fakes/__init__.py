"""Shared test doubles: re-export memory backends and workbook builders."""

from __future__ import annotations

from taskdesk.persistence.memory_backend import (
    MemoryAccountService,
    MemoryDataStore,
    MemoryRateLimitStore,
)
from tests.fakes.recording import RecordingDataStore, RecordingRateLimitStore
from tests.fakes.workbooks import TASK_HEADERS, build_workbook, truncate_sheet

__all__ = [
    "MemoryAccountService",
    "MemoryDataStore",
    "MemoryRateLimitStore",
    "RecordingDataStore",
    "RecordingRateLimitStore",
    "TASK_HEADERS",
    "build_workbook",
    "truncate_sheet",
]
