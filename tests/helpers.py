import io
from typing import Iterable, List, Optional, Sequence

import openpyxl

from modules.models import DAYS, OperationRecord, WeeklyMetric, WorkerRecord


def build_workbook(rows: Iterable[Sequence]) -> bytes:
    """Libro en memoria con una hoja; cada fila se añade tal cual (A=1)"""
    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    for row in rows:
        worksheet.append(list(row))
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def worker_header(worker_id: str, name: str) -> List:
    return [f"{worker_id} / {name}"]


def operation_row(name, style="S-100", order="OP-1", meta=100, price_per_hour=0,
                  production: Sequence = (0,) * 7, total=None, price_per_piece=0,
                  minutes_per_piece=0) -> List:
    return [name, style, order, meta, price_per_hour, *production, total,
            price_per_piece, minutes_per_piece]


def summary_row(label: str, values: Sequence) -> List:
    """Fila resumen con Lun..Dom en E..K"""
    return [label, None, None, None, *values]


def legacy_summary_row(label: str, values: Sequence) -> List:
    """Fila resumen de la plantilla antigua: E vacía y Lun..Dom en F..L"""
    return [label, None, None, None, None, *values]


def make_operation(name="Pegar cuello", meta: Optional[float] = 100.0, price_per_piece=0.0,
                   **production) -> OperationRecord:
    return OperationRecord(
        name=name,
        style="S-100",
        order="OP-1",
        meta=meta,
        price_per_piece=price_per_piece,
        daily_production=WeeklyMetric(production, default=0),
    )


def make_worker(worker_id="101", name="Ana López", operations=None, worked="8:00",
                inactive="0:00") -> WorkerRecord:
    return WorkerRecord(
        id=worker_id,
        name=name,
        operations=list(operations or []),
        hours_worked=WeeklyMetric.filled(worked),
        inactive_hours=WeeklyMetric.filled(inactive),
    )


def all_days(value) -> List:
    return [value] * len(DAYS)
