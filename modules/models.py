import copy
import math
from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, Iterator, List, Mapping, Optional, Tuple, TypeVar

T = TypeVar("T")

DAYS: Tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

DAY_LABELS: Dict[str, str] = {
    "mon": "Lun",
    "tue": "Mar",
    "wed": "Mie",
    "thu": "Jue",
    "fri": "Vie",
    "sat": "Sab",
    "sun": "Dom",
}

ZERO_TIME = "0:00"

# Etiquetas de cabecera/resumen que nunca son operaciones reales
RESERVED_LABELS: Tuple[str, ...] = ("operación", "operacion", "estilo", "orden", "meta", "total")


# =============================================================================
# MÉTRICA SEMANAL
# =============================================================================

class WeeklyMetric(Generic[T]):
    """Un valor por día de la semana (lun..dom); siempre tiene las siete claves."""

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, T]] = None, default: T = 0):
        values = values or {}
        unknown = set(values) - set(DAYS)
        if unknown:
            raise KeyError(f"Días desconocidos: {sorted(unknown)}")
        self._values: Dict[str, T] = {day: values.get(day, default) for day in DAYS}

    @classmethod
    def filled(cls, value: T) -> "WeeklyMetric[T]":
        return cls(default=value)

    @classmethod
    def from_values(cls, values: Iterable[T], default: T = 0) -> "WeeklyMetric[T]":
        """Construye la métrica a partir de una secuencia ordenada lun..dom"""
        values = list(values)[:len(DAYS)]
        return cls(dict(zip(DAYS, values)), default=default)

    @classmethod
    def from_mapping(cls, values: Mapping[str, T], default: T = 0) -> "WeeklyMetric[T]":
        return cls({day: values[day] for day in DAYS if day in values}, default=default)

    def __getitem__(self, day: str) -> T:
        return self._values[day]

    def __setitem__(self, day: str, value: T) -> None:
        if day not in self._values:
            raise KeyError(day)
        self._values[day] = value

    def __iter__(self) -> Iterator[str]:
        return iter(DAYS)

    def __len__(self) -> int:
        return len(DAYS)

    def __eq__(self, other) -> bool:
        if isinstance(other, WeeklyMetric):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"WeeklyMetric({self._values!r})"

    def items(self) -> List[Tuple[str, T]]:
        return [(day, self._values[day]) for day in DAYS]

    def values(self) -> List[T]:
        return [self._values[day] for day in DAYS]

    def to_dict(self) -> Dict[str, T]:
        return dict(self.items())

    def copy(self) -> "WeeklyMetric[T]":
        return WeeklyMetric(dict(self._values))


def zero_hours() -> WeeklyMetric:
    return WeeklyMetric.filled(ZERO_TIME)


def zero_metric() -> WeeklyMetric:
    return WeeklyMetric.filled(0)


# =============================================================================
# MODELO DE DATOS
# =============================================================================

@dataclass
class OperationRecord:
    name: str = ""
    style: str = ""
    order: str = ""
    meta: Optional[float] = None  # None = sin meta
    price_per_hour: float = 0.0
    price_per_piece: float = 0.0
    minutes_per_piece: float = 0.0
    daily_production: WeeklyMetric = field(default_factory=zero_metric)
    total: Optional[float] = None

    def has_meta(self) -> bool:
        return self.meta is not None and math.isfinite(self.meta) and self.meta > 0

    def is_reserved_label(self) -> bool:
        name = self.name.strip().lower()
        return any(label in name for label in RESERVED_LABELS)

    def is_real_operation(self) -> bool:
        """Operación que se muestra y entra en el cálculo de eficiencia"""
        if not self.name.strip() or self.is_reserved_label():
            return False
        has_production = any(value != 0 for value in self.daily_production.values())
        return has_production or self.has_meta()

    def to_dict(self) -> Dict:
        row = {
            "Operación": self.name,
            "Estilo": self.style,
            "Orden": self.order,
            "Meta": self.meta,
            "Precio por hora": self.price_per_hour,
        }
        for day in DAYS:
            row[DAY_LABELS[day]] = self.daily_production[day]
        row["Total"] = self.total
        row["Precio por pieza"] = self.price_per_piece
        row["Minutos por pieza"] = self.minutes_per_piece
        return row


@dataclass
class WorkerRecord:
    id: str = ""
    name: str = ""
    operations: List[OperationRecord] = field(default_factory=list)
    hours_worked: WeeklyMetric = field(default_factory=zero_hours)
    inactive_hours: WeeklyMetric = field(default_factory=zero_hours)
    efficiency: WeeklyMetric = field(default_factory=zero_metric)
    bonus: Optional[WeeklyMetric] = None

    @property
    def label(self) -> str:
        return f"{self.id} / {self.name}"

    def real_operations(self) -> List[OperationRecord]:
        return [op for op in self.operations if op.is_real_operation()]

    def copy(self) -> "WorkerRecord":
        return copy.deepcopy(self)
