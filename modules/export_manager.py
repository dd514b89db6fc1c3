import io
import logging
import math
import numbers
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from modules.config import COLUMN_WIDTH, EXPORT_FILE_PREFIX, EXPORT_SHEET_NAME
from modules.exceptions import SerializationError
from modules.models import DAY_LABELS, DAYS, OperationRecord, WorkerRecord

logger = logging.getLogger(__name__)

EXCEL_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DAY_COLUMNS = [DAY_LABELS[day] for day in DAYS]
SUMMARY_COLUMNS = ["Horas trabajadas", "Horas inactivas", "Eficiencia", "Bono"]
EXPORT_COLUMNS = (
    ["ID", "Trabajador", "Operación", "Estilo", "Orden", "Meta", "Precio por hora"]
    + DAY_COLUMNS
    + ["Total", "Precio por pieza", "Minutos por pieza"]
    + SUMMARY_COLUMNS
)


def build_download_filename() -> str:
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"{EXPORT_FILE_PREFIX}_{timestamp}.xlsx"


def _number(value: Any, field_name: str, optional: bool = False) -> Optional[float]:
    """Valida un campo numérico antes de escribirlo"""
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise SerializationError(f"Valor no numérico en '{field_name}': {value!r}")
    number = float(value)
    if math.isnan(number) and optional:
        return None
    if not math.isfinite(number):
        raise SerializationError(f"Valor no válido en '{field_name}': {value!r}")
    return number


# =============================================================================
# EXPORT MANAGER
# =============================================================================

class ExportManager:
    @staticmethod
    def export_to_excel(workers: List[WorkerRecord]) -> bytes:
        """Genera el libro .xlsx con las operaciones y los resúmenes de cada trabajador"""
        rows: List[Dict[str, Any]] = []
        for worker in workers:
            rows.append({})
            for op in worker.real_operations():
                rows.append(ExportManager._operation_row(worker, op))
            rows.extend(ExportManager._summary_rows(worker))

        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)

        try:
            excel_buffer = io.BytesIO()
            with pd.ExcelWriter(excel_buffer, engine='openpyxl') as writer:
                df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
                worksheet = writer.sheets[EXPORT_SHEET_NAME]
                for column in range(1, len(EXPORT_COLUMNS) + 1):
                    worksheet.column_dimensions[get_column_letter(column)].width = COLUMN_WIDTH
        except Exception as e:
            logger.exception("Error generando el Excel")
            raise SerializationError("No se pudo generar el archivo Excel.") from e

        logger.info("Excel generado: %d trabajadores, %d filas", len(workers), len(rows) + 1)
        return excel_buffer.getvalue()

    @staticmethod
    def _identity(worker: WorkerRecord) -> Dict[str, Any]:
        return {"ID": worker.id, "Trabajador": worker.name}

    @staticmethod
    def _operation_row(worker: WorkerRecord, op: OperationRecord) -> Dict[str, Any]:
        row = ExportManager._identity(worker)
        row.update({
            "Operación": op.name,
            "Estilo": op.style,
            "Orden": op.order,
            "Meta": _number(op.meta, "Meta", optional=True),
            "Precio por hora": _number(op.price_per_hour, "Precio por hora"),
            "Total": _number(op.total, "Total", optional=True),
            "Precio por pieza": _number(op.price_per_piece, "Precio por pieza"),
            "Minutos por pieza": _number(op.minutes_per_piece, "Minutos por pieza"),
        })
        for day in DAYS:
            row[DAY_LABELS[day]] = _number(op.daily_production[day], DAY_LABELS[day])
        return row

    @staticmethod
    def _summary_rows(worker: WorkerRecord) -> List[Dict[str, Any]]:
        bonus = worker.bonus.to_dict() if worker.bonus is not None else {}
        summaries = [
            ("Horas trabajadas", worker.hours_worked.to_dict()),
            ("Horas inactivas", worker.inactive_hours.to_dict()),
            ("Eficiencia", {
                day: f"{_number(value, 'Eficiencia'):.2f}"
                for day, value in worker.efficiency.items()
            }),
            ("Bono", {
                day: _number(bonus.get(day) or 0, "Bono") for day in DAYS
            }),
        ]

        rows = []
        for label, values in summaries:
            row = ExportManager._identity(worker)
            row["Operación"] = label
            for day in DAYS:
                row[DAY_LABELS[day]] = values[day]
            rows.append(row)
        return rows


def serialize_workers(workers: List[WorkerRecord]) -> bytes:
    return ExportManager.export_to_excel(workers)
