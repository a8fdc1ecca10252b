"""SpreadsheetParser: decodes an uploaded workbook into ImportRow records."""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from typing import Any
from xml.etree.ElementTree import ParseError

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from taskdesk.core.exceptions import EmptyFileError, MissingColumnsError, UnreadableWorkbookError
from taskdesk.models.tasks import REQUIRED_COLUMNS, ImportRow

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def read_sheet(data: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    """Return the first worksheet's headers and its rows keyed by header.

    Rows with every cell empty are dropped; empty cells are omitted from their row.
    """
    try:
        workbook = openpyxl.load_workbook(BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, ParseError, OSError, KeyError, ValueError) as exc:
        logger.warning("Workbook could not be opened: %s", exc)
        raise UnreadableWorkbookError() from exc

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header_row = next(rows, None) or ()
        headers = [str(h).strip() if h is not None else "" for h in header_row]

        records: list[dict[str, Any]] = []
        for values in rows:
            record = {
                header: value
                for header, value in zip(headers, values)
                if header and not _is_blank(value)
            }
            if record:
                records.append(record)
    except (ParseError, KeyError, ValueError, TypeError) as exc:
        # read-only sheets are parsed lazily, during iteration
        logger.warning("Worksheet could not be parsed: %s", exc)
        raise UnreadableWorkbookError() from exc
    finally:
        workbook.close()

    return headers, records


def parse_workbook(data: bytes) -> list[ImportRow]:
    """Decode ``data`` into rows, checking only the workbook's structure."""
    headers, records = read_sheet(data)

    if not records:
        raise EmptyFileError()

    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        raise MissingColumnsError(missing)

    logger.info("Parsed %d data rows", len(records))
    return [ImportRow.from_cells(record) for record in records]
