"""TaskDesk exception hierarchy.

Every error carries the HTTP status the API layer answers with; the message is
what the caller sees.
"""

from __future__ import annotations


class TaskDeskError(Exception):
    """Base exception for all TaskDesk errors."""

    status_code: int = 400


# ---------------------------------------------------------------------------
# Admin bootstrap
# ---------------------------------------------------------------------------

class RateLimitedError(TaskDeskError):
    """Client address exceeded its request quota for the current window."""

    status_code = 429

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__("Too many requests. Please try again later.")


class UnauthorizedError(TaskDeskError):
    """Missing or mismatched credential (bootstrap token, acting user)."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AdminExistsError(TaskDeskError):
    """An admin already exists; bootstrap only provisions the first one."""

    def __init__(self) -> None:
        super().__init__("Admin already exists. Use the normal user creation flow.")


class InvalidRequestError(TaskDeskError):
    """Malformed request body or field."""


class ProvisioningInconsistencyError(TaskDeskError):
    """Account service says the email is registered but the account is missing."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("User exists but could not be found")


class AccountServiceError(TaskDeskError):
    """External account service call failed."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.code = code
        super().__init__(message)


class DataStoreError(TaskDeskError):
    """External row store call failed."""


class CacheError(TaskDeskError):
    """Redis cache operation failed."""

    status_code = 503


# ---------------------------------------------------------------------------
# Spreadsheet import
# ---------------------------------------------------------------------------

class StructuralImportError(TaskDeskError):
    """The workbook as a whole cannot be imported; no row was processed."""


class UnreadableWorkbookError(StructuralImportError):
    """File is not a readable workbook."""

    def __init__(self) -> None:
        super().__init__("Không thể đọc file Excel. Vui lòng kiểm tra định dạng file.")


class EmptyFileError(StructuralImportError):
    """Workbook has a header but no data rows."""

    def __init__(self) -> None:
        super().__init__("File không có dữ liệu")


class MissingColumnsError(StructuralImportError):
    """Required header columns are absent."""

    def __init__(self, columns: list[str]) -> None:
        self.columns = columns
        super().__init__(f"Thiếu cột bắt buộc: {', '.join(columns)}")
