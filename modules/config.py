import logging
import os
from dataclasses import dataclass
from typing import Tuple

# =============================================================================
# CONFIGURACIÓN GENERAL
# =============================================================================

PAGE_TITLE = "Control de Eficiencia"
PAGE_ICON = "⏱️"

CACHE_TTL = 3600  # Cache por 1 hora

LOG_LEVEL_ENV = "CONTROL_EFICIENCIA_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

EXPORT_SHEET_NAME = "Eficiencia"
EXPORT_FILE_PREFIX = "control_horas"
COLUMN_WIDTH = 15


# =============================================================================
# FORMATO DE LA HOJA DE ENTRADA
# =============================================================================

@dataclass(frozen=True)
class SheetLayout:
    """Posiciones de columna (base 1, A=1) de la plantilla de producción"""
    label: int = 1
    style: int = 2
    order: int = 3
    meta: int = 4
    price_per_hour: int = 5
    production: Tuple[int, ...] = (6, 7, 8, 9, 10, 11, 12)
    total: int = 13
    price_per_piece: int = 14
    minutes_per_piece: int = 15
    # Filas resumen (horas, inactivas, eficiencia): Lun..Dom en E..K
    summary: Tuple[int, ...] = (5, 6, 7, 8, 9, 10, 11)
    # Plantilla antigua con una columna vacía delante: Lun..Dom en F..L
    legacy_summary: Tuple[int, ...] = (6, 7, 8, 9, 10, 11, 12)


DEFAULT_LAYOUT = SheetLayout()


_logging_configured = False


def configure_logging() -> None:
    """Configura el logging una sola vez por proceso"""
    global _logging_configured
    if _logging_configured:
        return
    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    _logging_configured = True
