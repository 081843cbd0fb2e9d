"""Tab 3: Range Selection — pick floors and unit suffixes across blocks, assign."""

import streamlit as st

from components.assign_panel import render_assign_panel
from components.metrics_cards import render_metric_row, render_warnings
from components.tables import render_selection_table, selection_frame
from data.session_store import get_designs, get_tower, is_data_loaded
from engine.explainer import explain_range
from engine.range_selection import (
    available_floor_codes, available_unit_suffixes, check_compatibility, run_range_selection,
)


def _bounds(label: str, options: list, key: str):
    col1, col2 = st.columns(2)
    with col1:
        low = st.selectbox(f"{label} from", [None] + options, key=f"{key}_from",
                           format_func=lambda x: "—" if x is None else x)
    with col2:
        high = st.selectbox(f"{label} to", [None] + options, key=f"{key}_to",
                            format_func=lambda x: "—" if x is None else x)
    return low, high


def render(sidebar_state):
    """Render the Range Selection tab."""
    st.header("Range Selection")

    if not is_data_loaded():
        st.info("No tower loaded. Load one in the Inventory tab.")
        return
    if not sidebar_state.block_ids:
        st.info("Select one or more blocks in the sidebar.")
        return

    tower = get_tower()
    block_ids = sidebar_state.block_ids
    design_names = {d.design_id: d.display_name for d in get_designs()}

    compatibility = check_compatibility(block_ids, tower)

    floor_from, floor_to = _bounds("Floor", available_floor_codes(block_ids, tower), "range_floor")
    unit_from, unit_to = _bounds(
        "Unit", available_unit_suffixes(block_ids, floor_from, floor_to, tower), "range_unit",
    )

    result = run_range_selection(block_ids, floor_from, floor_to, unit_from, unit_to, tower)

    render_metric_row([
        {"label": "Blocks", "value": len(block_ids)},
        {"label": "Floor sets match", "value": "Yes" if compatibility.compatible else "No"},
        {"label": "Selected units", "value": len(result.resolved_ids)},
    ])
    render_warnings(result.warnings)

    labels = [b.label for b in (tower.get_block(bid) for bid in block_ids) if b is not None]
    with st.expander("How the range was applied"):
        for step in explain_range(labels, floor_from, floor_to, unit_from, unit_to,
                                  compatibility, len(result.resolved_ids)):
            st.write(step)

    render_selection_table(selection_frame(tower, result.resolved_ids, design_names), "Selected units")
    render_assign_panel(result.resolved_ids, sidebar_state.design_id, key="range")
