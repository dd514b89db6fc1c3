from typing import List

import streamlit as st

from modules.config import CACHE_TTL
from modules.data_manager import parse_workbook
from modules.models import WorkerRecord

# =============================================================================
# FUNCIONES DE CARGA CACHEADAS
# =============================================================================

@st.cache_data(ttl=CACHE_TTL, show_spinner=False)
def load_workers(file_bytes: bytes) -> List[WorkerRecord]:
    """Parsea el libro subido; el mismo archivo no se vuelve a leer.

    ``st.cache_data`` devuelve una copia en cada llamada, así que las
    ediciones de la sesión no alteran el resultado cacheado.
    """
    return parse_workbook(file_bytes)
