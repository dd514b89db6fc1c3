import logging
from typing import List, MutableMapping, Optional

import streamlit as st

from modules.efficiency import apply_worker_update, compute_bonus
from modules.models import WorkerRecord

logger = logging.getLogger(__name__)

FLASH_KEY = "flash_messages"


def push_flash(state: MutableMapping, message: str):
    """Guarda un mensaje para mostrarlo tras el siguiente st.rerun"""
    state[FLASH_KEY] = list(state.get(FLASH_KEY, [])) + [message]


def pop_flash(state: MutableMapping) -> List[str]:
    return list(state.pop(FLASH_KEY, []))


class SessionManager:
    @staticmethod
    def init_session_state():
        if 'app_initialized_eficiencia' not in st.session_state:
            st.session_state.app_initialized_eficiencia = True
            st.session_state.workers = []
            st.session_state.is_loading = False
            st.session_state.upload_error = None
            st.session_state.loaded_file_id = None

    @staticmethod
    def start_loading() -> bool:
        """Marca una carga en curso; devuelve False si ya había otra"""
        if st.session_state.is_loading:
            return False
        st.session_state.is_loading = True
        st.session_state.upload_error = None
        return True

    @staticmethod
    def finish_loading():
        st.session_state.is_loading = False

    @staticmethod
    def is_loading() -> bool:
        return st.session_state.get('is_loading', False)

    @staticmethod
    def get_workers() -> List[WorkerRecord]:
        return st.session_state.get('workers', [])

    @staticmethod
    def set_workers(workers: List[WorkerRecord], file_id: Optional[str] = None):
        # Sin fila "Bono" en el libro el bono se calcula al cargar
        for worker in workers:
            if worker.bonus is None:
                worker.bonus = compute_bonus(worker.real_operations())
        st.session_state.workers = workers
        st.session_state.loaded_file_id = file_id
        logger.info("Sesión con %d trabajadores", len(workers))

    @staticmethod
    def on_worker_updated(worker: WorkerRecord):
        """Recalcula el trabajador editado antes de volver a renderizar"""
        st.session_state.workers = apply_worker_update(SessionManager.get_workers(), worker)

    @staticmethod
    def set_error(message: Optional[str]):
        st.session_state.upload_error = message

    @staticmethod
    def get_error() -> Optional[str]:
        return st.session_state.get('upload_error')

    @staticmethod
    def add_message(message: str):
        push_flash(st.session_state, message)

    @staticmethod
    def pop_messages() -> List[str]:
        return pop_flash(st.session_state)

    @staticmethod
    def reset_state():
        st.session_state.workers = []
        st.session_state.is_loading = False
        st.session_state.upload_error = None
        st.session_state.loaded_file_id = None
