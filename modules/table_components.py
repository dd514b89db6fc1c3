from typing import Callable, Dict, List

import pandas as pd
import streamlit as st

from modules.efficiency import efficiency_level
from modules.models import DAY_LABELS, DAYS, WeeklyMetric, WorkerRecord
from modules.time_utils import format_time
from validation_manager import SessionManager

LEVEL_COLORS = {
    "alta": "color: #16a34a",
    "media": "color: #ca8a04",
    "baja": "color: #dc2626",
}

HOURS_WORKED_ROW = "Horas trabajadas"
INACTIVE_HOURS_ROW = "Horas inactivas"


# =============================================================================
# TABLA POR TRABAJADOR
# =============================================================================

class WorkerTable:
    def __init__(self, worker: WorkerRecord, on_update: Callable[[WorkerRecord], None]):
        self.worker = worker
        self.on_update = on_update

    @property
    def key(self) -> str:
        return f"worker_{self.worker.id}_{self.worker.name}"

    def render(self) -> None:
        with st.expander(f"👷 {self.worker.label}", expanded=True):
            self._render_operations()
            self._render_hours_editor()
            self._render_metrics()

    def _render_operations(self) -> None:
        operations = self.worker.real_operations()
        if not operations:
            st.info("Sin operaciones registradas")
            return
        df = pd.DataFrame([op.to_dict() for op in operations])
        st.dataframe(
            df[["Operación", "Estilo", "Orden"] + [DAY_LABELS[day] for day in DAYS] + ["Total"]],
            hide_index=True,
            width='stretch',
        )

    def _hours_frame(self) -> pd.DataFrame:
        rows = {
            HOURS_WORKED_ROW: self.worker.hours_worked,
            INACTIVE_HOURS_ROW: self.worker.inactive_hours,
        }
        return pd.DataFrame(
            [{DAY_LABELS[day]: hours[day] for day in DAYS} for hours in rows.values()],
            index=list(rows.keys()),
        )

    def _render_hours_editor(self) -> None:
        original = self._hours_frame()
        column_config = {
            DAY_LABELS[day]: st.column_config.TextColumn(DAY_LABELS[day], help="Formato: H:MM", width="small")
            for day in DAYS
        }
        edited = st.data_editor(
            original,
            column_config=column_config,
            num_rows="fixed",
            width='stretch',
            key=f"{self.key}_hours",
        )

        if st.button("💾 Guardar horas", key=f"{self.key}_save"):
            self._save_hours(edited)

    def _save_hours(self, edited: pd.DataFrame) -> None:
        updated = self.worker.copy()
        updated.hours_worked = self._read_row(edited, HOURS_WORKED_ROW)
        updated.inactive_hours = self._read_row(edited, INACTIVE_HOURS_ROW)
        self.on_update(updated)
        SessionManager.add_message(f"✅ Horas actualizadas para {updated.label}")
        st.rerun()

    @staticmethod
    def _read_row(edited: pd.DataFrame, row_name: str) -> WeeklyMetric:
        row = edited.loc[row_name]
        return WeeklyMetric.from_mapping(
            {day: format_time(row[DAY_LABELS[day]]) for day in DAYS},
            default="0:00",
        )

    def _render_metrics(self) -> None:
        efficiency = self.worker.efficiency
        bonus = self.worker.bonus or WeeklyMetric.filled(0.0)
        df = pd.DataFrame(
            [
                {DAY_LABELS[day]: efficiency[day] for day in DAYS},
                {DAY_LABELS[day]: bonus[day] for day in DAYS},
            ],
            index=["Eficiencia", "Bono"],
        )
        styled = (
            df.style
            .format("{:.2f}%", subset=pd.IndexSlice[["Eficiencia"], :])
            .format("${:,.2f}", subset=pd.IndexSlice[["Bono"], :])
            .map(lambda value: LEVEL_COLORS[efficiency_level(value)], subset=pd.IndexSlice[["Eficiencia"], :])
        )
        st.dataframe(styled, width='stretch')


# =============================================================================
# RESUMEN GENERAL
# =============================================================================

def render_summary(summary: Dict[str, float]) -> None:
    st.header("📊 Resumen")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("👷 Total trabajadores", f"{summary['total_workers']}")
    with col2:
        st.metric("⚙️ Eficiencia promedio", f"{summary['average_efficiency']:.2f}%")
    with col3:
        st.metric("📋 Total operaciones", f"{summary['total_operations']}")


def render_workers(workers: List[WorkerRecord], on_update: Callable[[WorkerRecord], None]) -> None:
    for worker in workers:
        WorkerTable(worker, on_update).render()
