import logging
import math
from typing import Dict, Iterable, List

import numpy as np

from modules.models import DAYS, OperationRecord, WeeklyMetric, WorkerRecord
from modules.time_utils import parse_hours

logger = logging.getLogger(__name__)

HIGH_EFFICIENCY = 100.0
MEDIUM_EFFICIENCY = 80.0


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _produced(op: OperationRecord, day: str) -> float:
    try:
        return _finite(float(op.daily_production[day]))
    except (TypeError, ValueError):
        return 0.0


# =============================================================================
# CÁLCULO DE EFICIENCIA Y BONO
# =============================================================================

def compute_efficiency(
    operations: Iterable[OperationRecord],
    hours_worked: WeeklyMetric,
    inactive_hours: WeeklyMetric,
) -> WeeklyMetric:
    """Eficiencia diaria (%) = Σ(producido / meta) / horas disponibles * 100.

    Solo suman las operaciones con meta > 0 y producción > 0 ese día. Las
    horas disponibles son trabajadas menos inactivas, sin bajar de cero. Un
    día con entradas degeneradas vale 0; nunca devuelve NaN ni infinito.
    """
    operations = list(operations)
    efficiency = WeeklyMetric.filled(0.0)

    for day in DAYS:
        units_over_meta = 0.0
        for op in operations:
            produced = _produced(op, day)
            if op.has_meta() and produced > 0:
                units_over_meta += produced / op.meta

        worked = parse_hours(hours_worked[day])
        inactive = parse_hours(inactive_hours[day])
        available = max(0.0, worked - inactive)

        if available > 0 and units_over_meta > 0:
            efficiency[day] = _finite(units_over_meta / available * 100)

    return efficiency


def compute_bonus(operations: Iterable[OperationRecord]) -> WeeklyMetric:
    """Bono diario = Σ piezas * precio por pieza, sin depender de la meta"""
    operations = list(operations)
    bonus = WeeklyMetric.filled(0.0)
    for day in DAYS:
        total = sum(_produced(op, day) * _finite(op.price_per_piece) for op in operations)
        bonus[day] = _finite(total)
    return bonus


def efficiency_level(value: float) -> str:
    """Nivel para colorear la eficiencia en la tabla"""
    if value >= HIGH_EFFICIENCY:
        return "alta"
    if value >= MEDIUM_EFFICIENCY:
        return "media"
    return "baja"


# =============================================================================
# ACTUALIZACIÓN DE TRABAJADORES
# =============================================================================

def refresh_worker(worker: WorkerRecord) -> WorkerRecord:
    """Recalcula eficiencia y bono a partir de las operaciones reales"""
    operations = worker.real_operations()
    worker.efficiency = compute_efficiency(operations, worker.hours_worked, worker.inactive_hours)
    worker.bonus = compute_bonus(operations)
    return worker


def apply_worker_update(workers: List[WorkerRecord], updated: WorkerRecord) -> List[WorkerRecord]:
    """Recalcula el trabajador editado y lo sustituye en la lista (mismo id y nombre)"""
    refresh_worker(updated)
    replaced = False
    result = []
    for worker in workers:
        if (worker.id, worker.name) == (updated.id, updated.name) and not replaced:
            result.append(updated)
            replaced = True
        else:
            result.append(worker)
    if not replaced:
        logger.warning("Trabajador %s no encontrado; no se actualiza la lista", updated.label)
    return result


def compute_summary(workers: List[WorkerRecord]) -> Dict[str, float]:
    """Estadísticas generales: trabajadores, eficiencia media y operaciones"""
    if not workers:
        return {"total_workers": 0, "average_efficiency": 0.0, "total_operations": 0}

    matrix = np.array([worker.efficiency.values() for worker in workers], dtype=float)
    matrix = np.nan_to_num(matrix, nan=0.0, posinf=0.0, neginf=0.0)
    return {
        "total_workers": len(workers),
        "average_efficiency": float(matrix.mean(axis=1).mean()),
        "total_operations": sum(len(worker.real_operations()) for worker in workers),
    }
