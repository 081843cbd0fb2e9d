"""Global sidebar controls for block and design selection."""

from dataclasses import dataclass, field
from typing import List, Optional

import streamlit as st

from data.errors import DataLoadError
from data.session_store import (
    get_designs, get_index, get_loader, get_tower, is_data_loaded, run_with_client,
)


@dataclass
class SidebarState:
    block_ids: List[int] = field(default_factory=list)
    design_id: Optional[int] = None


def _sync_blocks(block_ids: List[int]):
    loader = get_loader()
    if loader is None:
        return
    try:
        with st.spinner("Loading floors and units..."):
            run_with_client(lambda client: loader.sync_selection(block_ids))
    except DataLoadError as e:
        st.error(f"Loading failed: {e}")


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Unit Design Planner")
        st.divider()

        if not is_data_loaded():
            st.warning("No tower loaded — go to the Inventory tab")
            return SidebarState()

        tower = get_tower()
        st.caption(f"Tower: {tower.name}")

        labels = {b.block_id: b.label for b in tower.blocks}
        block_ids = st.multiselect(
            "Blocks",
            options=list(labels.keys()),
            format_func=lambda x: labels.get(x, str(x)),
            key="sidebar_blocks",
        )
        _sync_blocks(block_ids)

        designs = get_designs()
        names = {d.design_id: d.display_name for d in designs}
        design_id = st.selectbox(
            "Design to assign",
            options=[None] + list(names.keys()),
            format_func=lambda x: "— choose —" if x is None else names.get(x, str(x)),
            key="sidebar_design",
        )

        st.divider()
        index = get_index()
        st.caption(f"Loaded units: {len(index.units_by_id)}")
        st.caption(f"Visual keys: {len(index)}")
        if index.conflicts:
            st.caption(f"Key conflicts: {len(index.conflicts)}")

    return SidebarState(block_ids=block_ids, design_id=design_id)
