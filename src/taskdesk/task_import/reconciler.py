"""ImportReconciler: resolves row references and persists tasks one row at a time."""

from __future__ import annotations

import logging

from taskdesk.core.exceptions import DataStoreError
from taskdesk.core.protocols import IDataStore
from taskdesk.core.types import EMPLOYEES_TABLE, PROJECTS_TABLE, TASKS_TABLE
from taskdesk.models.tasks import ImportReport, ImportRow, LookupEntry, LookupTables, ReconciledTask
from taskdesk.task_import.field_normalizer import map_priority, map_status, parse_due_date

logger = logging.getLogger(__name__)

# Spreadsheet rows are 1-indexed and the first one is the header.
FIRST_DATA_ROW = 2


def display_row(index: int) -> int:
    """Spreadsheet row number for the zero-based data row ``index``."""
    return index + FIRST_DATA_ROW


class ImportReconciler:
    """Turns parsed rows into tasks, collecting an error per rejected row.

    Rows are processed strictly in order and each insert finishes before the
    next row starts, so the error list is reproducible for a given input.
    """

    def __init__(self, store: IDataStore) -> None:
        self._store = store

    def load_lookups(self) -> LookupTables:
        """Snapshot projects and employees for one import session."""
        projects = [
            LookupEntry(id=str(p["id"]), name=p.get("name") or "")
            for p in self._store.select(PROJECTS_TABLE)
        ]
        employees = [
            LookupEntry(id=str(e["id"]), name=e.get("full_name") or "")
            for e in self._store.select(EMPLOYEES_TABLE)
        ]
        return LookupTables(projects=projects, employees=employees)

    def build_task(self, row: ImportRow, project: LookupEntry, lookups: LookupTables,
                   acting_user_id: str) -> ReconciledTask:
        assignee = lookups.find_employee(row.assignee_name)
        return ReconciledTask(
            title=row.title or "",
            description=row.description or None,
            status=map_status(row.status_label),
            priority=map_priority(row.priority_label),
            due_date=parse_due_date(row.due_date_raw),
            project_id=project.id,
            assigned_to=assignee.id if assignee else None,
            created_by=acting_user_id,
        )

    def reconcile(self, rows: list[ImportRow], lookups: LookupTables,
                  acting_user_id: str) -> ImportReport:
        report = ImportReport()

        for index, row in enumerate(rows):
            row_num = display_row(index)

            project = lookups.find_project(row.project_name)
            if project is None:
                report.errors.append(
                    f'Dòng {row_num}: Không tìm thấy dự án "{row.project_name or ""}"'
                )
                continue

            task = self.build_task(row, project, lookups, acting_user_id)
            if not task.title:
                report.errors.append(f"Dòng {row_num}: Thiếu tiêu đề nhiệm vụ")
                continue

            try:
                self._store.insert(TASKS_TABLE, task.to_row())
            except DataStoreError as exc:
                logger.warning("Task insert failed for row %d: %s", row_num, exc)
                report.errors.append(f"Dòng {row_num}: {exc}")
                continue
            report.imported += 1

        logger.info(
            "Import by %s: %d tasks created, %d errors",
            acting_user_id, report.imported, len(report.errors),
        )
        return report
