"""
Session state management for Streamlit app.
"""
import streamlit as st
from typing import Any, Optional

from bizpulse.data.mapping import ColumnRoleMapping, suggest_mapping
from bizpulse.data.mapping_store import MappingStore
from bizpulse.data.schema import Table


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULTS = {
    "table": None,
    "mapping": ColumnRoleMapping(),
    "import_error": "",
    "sheets_url_hint": "",
}


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize all session state keys with defaults."""
    for key, default in DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key, DEFAULTS.get(key))


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


# =============================================================================
# TABLE + MAPPING
# =============================================================================

def get_table() -> Optional[Table]:
    return get_state("table")


def get_mapping() -> ColumnRoleMapping:
    return get_state("mapping")


def load_table(table: Table, store: Optional[MappingStore] = None):
    """
    Replace the current table and pick its mapping.

    The name-based suggestion is applied first, then any mapping saved for
    the same source name overrides it.
    """
    store = store or MappingStore()
    mapping = suggest_mapping(table.columns)
    saved = store.load(table.source_name)
    if saved is not None:
        mapping = saved.resolve(table.columns)

    set_state("table", table)
    set_state("mapping", mapping)
    set_state("import_error", "")


def set_mapping(mapping: ColumnRoleMapping, store: Optional[MappingStore] = None):
    """Update the active mapping and remember it for this source."""
    set_state("mapping", mapping)
    table = get_table()
    if table is not None:
        (store or MappingStore()).save(table.source_name, mapping)


def set_import_error(message: str):
    """Record an import failure; the loaded table is left as it was."""
    set_state("import_error", message)
