import logging

import streamlit as st

from modules.cache_utils import load_workers
from modules.config import PAGE_ICON, PAGE_TITLE, configure_logging
from modules.efficiency import compute_summary
from modules.exceptions import TimeTrackerError
from modules.export_manager import EXCEL_MIME, ExportManager, build_download_filename
from modules.table_components import render_summary, render_workers
from validation_manager import SessionManager

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout="wide"
)

configure_logging()
logger = logging.getLogger(__name__)


class TimeTrackerApp:
    def __init__(self):
        SessionManager.init_session_state()

    def run(self):
        st.title("⏱️ Control de Horas y Eficiencia")

        self._render_upload()

        for message in SessionManager.pop_messages():
            st.success(message)

        workers = SessionManager.get_workers()
        if not workers:
            st.info("💡 Sube el Excel semanal de producción para comenzar.")
            return

        st.header("👷 Trabajadores")
        render_workers(workers, SessionManager.on_worker_updated)
        render_summary(compute_summary(SessionManager.get_workers()))
        self._render_export_section()

    def _render_upload(self):
        uploaded = st.file_uploader(
            "📂 Archivo de producción (.xlsx)",
            type=["xlsx"],
            disabled=SessionManager.is_loading(),
            key="production_file",
        )

        if uploaded is not None and uploaded.file_id != st.session_state.loaded_file_id:
            self._handle_upload(uploaded)

        error = SessionManager.get_error()
        if error:
            st.error(f"⚠️ {error}")

    def _handle_upload(self, uploaded):
        if not SessionManager.start_loading():
            st.warning("⏳ Ya hay un archivo cargándose.")
            return
        try:
            with st.spinner("Leyendo archivo..."):
                workers = load_workers(uploaded.getvalue())
            SessionManager.set_workers(workers, uploaded.file_id)
            st.success(f"✅ {len(workers)} trabajadores cargados")
        except TimeTrackerError as e:
            # Se conservan los datos cargados anteriormente
            logger.error("Error cargando %s: %s", uploaded.name, e)
            SessionManager.set_error(str(e))
            st.session_state.loaded_file_id = uploaded.file_id
        finally:
            SessionManager.finish_loading()

    def _render_export_section(self):
        st.markdown("---")
        st.header("💾 Exportar Datos")

        try:
            with st.spinner("Generando Excel..."):
                excel_data = ExportManager.export_to_excel(SessionManager.get_workers())
        except TimeTrackerError as e:
            st.error(f"⚠️ {e}")
            return

        st.download_button(
            label="💾 Descargar Excel actualizado",
            data=excel_data,
            file_name=build_download_filename(),
            mime=EXCEL_MIME,
            help="Descarga las operaciones, horas, eficiencia y bono de cada trabajador (.xlsx)"
        )


if __name__ == "__main__":
    app = TimeTrackerApp()
    app.run()
