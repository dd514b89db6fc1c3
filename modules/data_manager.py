import io
import logging
import math
import re
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

import openpyxl

from modules.config import DEFAULT_LAYOUT, SheetLayout
from modules.exceptions import ParseError
from modules.models import OperationRecord, WeeklyMetric, WorkerRecord
from modules.time_utils import format_time

logger = logging.getLogger(__name__)

WORKER_HEADER_RE = re.compile(r"^\s*(\d+)\s*/\s*(.+)$")
HOURS_WORKED_LABEL = "horas trabajadas"
# "Hozas" y "hastivo" aparecen en plantillas antiguas
INACTIVE_HOURS_RE = re.compile(r"^(hozas|horas)\s+tiempo\s+(inactivo|hastivo)", re.IGNORECASE)
EFFICIENCY_RE = re.compile(r"eficiencia\s+diaria|elfabetos\s+distrita", re.IGNORECASE)
BONUS_RE = re.compile(r"^bono\b", re.IGNORECASE)


class RowKind(Enum):
    WORKER_HEADER = "worker_header"
    HOURS_WORKED = "hours_worked"
    INACTIVE_HOURS = "inactive_hours"
    EFFICIENCY = "efficiency"
    BONUS = "bonus"
    OPERATION = "operation"
    IGNORED = "ignored"


# =============================================================================
# LECTURA DE CELDAS
# =============================================================================

def _cell(values: Sequence[Any], column: int) -> Any:
    """Valor de la columna (base 1) o None si la fila es más corta"""
    if column < 1 or column > len(values):
        return None
    return values[column - 1]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _to_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _to_float(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Convierte una celda a número; si no se puede devuelve ``default``"""
    if _is_blank(value) or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace("%", "")
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return default
    return number if math.isfinite(number) else default


# =============================================================================
# CLASIFICACIÓN DE FILAS
# =============================================================================

def classify_row(values: Sequence[Any], layout: SheetLayout = DEFAULT_LAYOUT) -> RowKind:
    """Tipo de fila según la columna de etiqueta; gana la primera coincidencia"""
    label = _to_text(_cell(values, layout.label))
    if not label:
        return RowKind.IGNORED
    if WORKER_HEADER_RE.match(label):
        return RowKind.WORKER_HEADER
    if label.lower() == HOURS_WORKED_LABEL:
        return RowKind.HOURS_WORKED
    if INACTIVE_HOURS_RE.search(label):
        return RowKind.INACTIVE_HOURS
    if EFFICIENCY_RE.search(label):
        return RowKind.EFFICIENCY
    if BONUS_RE.search(label):
        return RowKind.BONUS
    required = (layout.label, layout.style, layout.order, layout.meta)
    if all(not _is_blank(_cell(values, column)) for column in required):
        return RowKind.OPERATION
    return RowKind.IGNORED


# =============================================================================
# PARSER DEL LIBRO DE PRODUCCIÓN
# =============================================================================

class WorkbookParser:
    def __init__(self, layout: SheetLayout = DEFAULT_LAYOUT, allow_legacy_summary: bool = True):
        self.layout = layout
        self.allow_legacy_summary = allow_legacy_summary

    def parse(self, file_bytes: bytes) -> List[WorkerRecord]:
        rows = self._read_first_sheet(file_bytes)

        workers: List[WorkerRecord] = []
        current: Optional[WorkerRecord] = None
        last_kind = RowKind.IGNORED

        for row_number, values in enumerate(rows, start=1):
            kind = classify_row(values, self.layout)

            if kind is RowKind.WORKER_HEADER:
                if current is not None:
                    workers.append(current)
                current = self._new_worker(values)
            elif current is None or kind is RowKind.IGNORED:
                continue
            elif kind is RowKind.HOURS_WORKED:
                current.hours_worked = self._read_hours(values, row_number)
            elif kind is RowKind.INACTIVE_HOURS:
                current.inactive_hours = self._read_hours(values, row_number)
            elif kind is RowKind.EFFICIENCY:
                current.efficiency = self._read_numbers(values, row_number)
            elif kind is RowKind.BONUS:
                current.bonus = self._read_numbers(values, row_number)
            elif kind is RowKind.OPERATION:
                current.operations.append(self._read_operation(values))

            logger.debug("Fila %d: %s (anterior: %s)", row_number, kind.value, last_kind.value)
            last_kind = kind

        if current is not None:
            workers.append(current)

        logger.info("Libro leído: %d trabajadores", len(workers))
        return workers

    def _read_first_sheet(self, file_bytes: bytes) -> List[Tuple[Any, ...]]:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(file_bytes), data_only=True)
        except Exception as e:
            logger.error("No se pudo abrir el libro: %s", e)
            raise ParseError(
                "No se pudo leer el archivo Excel. Verifica que tenga el formato esperado."
            ) from e

        try:
            if not workbook.worksheets:
                raise ParseError("El archivo Excel no contiene hojas.")
            worksheet = workbook.worksheets[0]
            # Incluye filas vacías para conservar la numeración
            return list(worksheet.iter_rows(min_row=1, max_row=worksheet.max_row, values_only=True))
        except ParseError:
            raise
        except Exception as e:
            logger.error("Error leyendo la primera hoja: %s", e)
            raise ParseError("No se pudo leer la primera hoja del archivo Excel.") from e
        finally:
            workbook.close()

    def _new_worker(self, values: Sequence[Any]) -> WorkerRecord:
        match = WORKER_HEADER_RE.match(_to_text(_cell(values, self.layout.label)))
        worker = WorkerRecord(id=match.group(1), name=match.group(2).strip())
        logger.debug("Nuevo trabajador %s", worker.label)
        return worker

    def _summary_values(self, values: Sequence[Any], row_number: int) -> List[Any]:
        columns = self.layout.summary
        if self.allow_legacy_summary and self._is_legacy_summary(values):
            logger.warning("Fila %d con columnas de la plantilla antigua (F..L)", row_number)
            columns = self.layout.legacy_summary
        return [_cell(values, column) for column in columns]

    def _is_legacy_summary(self, values: Sequence[Any]) -> bool:
        # Un 0 en E es un lunes real; solo E vacía con F..L completas es la plantilla antigua
        if not _is_blank(_cell(values, self.layout.summary[0])):
            return False
        return all(not _is_blank(_cell(values, column)) for column in self.layout.legacy_summary)

    def _read_hours(self, values: Sequence[Any], row_number: int) -> WeeklyMetric:
        return WeeklyMetric.from_values(
            format_time(value) for value in self._summary_values(values, row_number)
        )

    def _read_numbers(self, values: Sequence[Any], row_number: int) -> WeeklyMetric:
        return WeeklyMetric.from_values(
            _to_float(value) for value in self._summary_values(values, row_number)
        )

    def _read_operation(self, values: Sequence[Any]) -> OperationRecord:
        layout = self.layout
        minutes = _cell(values, layout.minutes_per_piece)
        if isinstance(minutes, str):
            minutes = minutes.replace("/", "")
        return OperationRecord(
            name=_to_text(_cell(values, layout.label)),
            style=_to_text(_cell(values, layout.style)),
            order=_to_text(_cell(values, layout.order)),
            meta=_to_float(_cell(values, layout.meta), default=None),
            price_per_hour=_to_float(_cell(values, layout.price_per_hour)),
            daily_production=WeeklyMetric.from_values(
                _to_float(_cell(values, column)) for column in layout.production
            ),
            total=_to_float(_cell(values, layout.total), default=None),
            price_per_piece=_to_float(_cell(values, layout.price_per_piece)),
            minutes_per_piece=_to_float(minutes),
        )


def parse_workbook(file_bytes: bytes, layout: SheetLayout = DEFAULT_LAYOUT) -> List[WorkerRecord]:
    return WorkbookParser(layout).parse(file_bytes)
