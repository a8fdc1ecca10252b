"""Task import models: spreadsheet rows, reconciled tasks, lookup tables."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Localized spreadsheet headers -> ImportRow field names.
COLUMN_TITLE = "Tiêu đề"
COLUMN_PROJECT = "Dự án"
COLUMN_ASSIGNEE = "Người thực hiện"
COLUMN_STATUS = "Trạng thái"
COLUMN_PRIORITY = "Ưu tiên"
COLUMN_DUE_DATE = "Ngày đến hạn"
COLUMN_DESCRIPTION = "Mô tả"

COLUMN_FIELDS: dict[str, str] = {
    COLUMN_TITLE: "title",
    COLUMN_PROJECT: "project_name",
    COLUMN_ASSIGNEE: "assignee_name",
    COLUMN_STATUS: "status_label",
    COLUMN_PRIORITY: "priority_label",
    COLUMN_DUE_DATE: "due_date_raw",
    COLUMN_DESCRIPTION: "description",
}

REQUIRED_COLUMNS: tuple[str, ...] = (COLUMN_TITLE, COLUMN_PROJECT)


class ImportRow(BaseModel):
    """One spreadsheet data row, keyed by field rather than header."""

    title: Optional[str] = None
    project_name: Optional[str] = None
    assignee_name: Optional[str] = None
    status_label: Optional[str] = None
    priority_label: Optional[str] = None
    due_date_raw: Any = None  # str, number, or date depending on the cell
    description: Optional[str] = None

    @classmethod
    def from_cells(cls, cells: dict[str, Any]) -> "ImportRow":
        """Build a row from a header -> cell value mapping."""
        data: dict[str, Any] = {}
        for header, value in cells.items():
            field = COLUMN_FIELDS.get(header)
            if field is None or value is None:
                continue
            if field != "due_date_raw":
                value = str(value).strip()
            data[field] = value
        return cls(**data)


class LookupEntry(BaseModel):
    id: str
    name: str


def _find_entry(entries: list[LookupEntry], name: Optional[str]) -> Optional[LookupEntry]:
    """Case-insensitive exact name match."""
    if not name:
        return None
    wanted = name.lower()
    for entry in entries:
        if entry.name.lower() == wanted:
            return entry
    return None


class LookupTables(BaseModel):
    """Project and employee snapshots for one import session."""

    projects: list[LookupEntry] = Field(default_factory=list)
    employees: list[LookupEntry] = Field(default_factory=list)

    model_config = {"frozen": True}

    def find_project(self, name: Optional[str]) -> Optional[LookupEntry]:
        return _find_entry(self.projects, name)

    def find_employee(self, name: Optional[str]) -> Optional[LookupEntry]:
        return _find_entry(self.employees, name)


class ReconciledTask(BaseModel):
    """Task ready for insertion into the ``tasks`` table."""

    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[str] = None  # ISO yyyy-mm-dd
    project_id: str
    assigned_to: Optional[str] = None
    created_by: str

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ImportReport(BaseModel):
    """Per-import outcome: rows that landed and ordered per-row errors."""

    imported: int = 0
    errors: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def completed(self) -> bool:
        """True when every row was imported."""
        return not self.errors


class ImportPreview(BaseModel):
    total_rows: int
    rows: list[ImportRow]
