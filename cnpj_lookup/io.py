"""Export helpers for fetched company records."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List

from .models import SCALAR_FIELDS, CompanyRecord


_CSV_SUFFIXES = {".csv"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xltx", ".xltm"}

FIELDNAMES: List[str] = [*SCALAR_FIELDS, "socios"]


def write_records(path: str | Path, records: Iterable[CompanyRecord]) -> None:
    file_path = Path(path)
    if file_path.suffix.lower() in _CSV_SUFFIXES:
        _write_records_to_csv(file_path, records)
        return
    if file_path.suffix.lower() in _EXCEL_SUFFIXES:
        _write_records_to_excel(file_path, records)
        return
    raise ValueError(f"Unsupported output format '{file_path.suffix}'. Use CSV or Excel spreadsheet")


def _write_records_to_csv(path: Path, records: Iterable[CompanyRecord]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
        writer.writeheader()
        for record in records:
            writer.writerow(record.as_row())


def _write_records_to_excel(path: Path, records: Iterable[CompanyRecord]) -> None:
    from openpyxl import Workbook

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Empresas"
    sheet.append(FIELDNAMES)
    for record in records:
        row = record.as_row()
        sheet.append([row[name] for name in FIELDNAMES])
    workbook.save(path)
