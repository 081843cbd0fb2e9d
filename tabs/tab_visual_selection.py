"""Tab 2: Visual Selection — click units on the block grids, resolve, assign."""

import streamlit as st

from components.assign_panel import render_assign_panel
from components.charts import unit_grid
from components.metrics_cards import render_metric_row, render_warnings
from components.tables import render_selection_table, selection_frame
from data.session_store import (
    get_debouncer, get_designs, get_index, get_selection, get_tower, is_data_loaded,
)
from engine.explainer import explain_resolution
from engine.resolver import resolve_batch


def render(sidebar_state):
    """Render the Visual Selection tab."""
    st.header("Visual Selection")

    if not is_data_loaded():
        st.info("No tower loaded. Load one in the Inventory tab.")
        return
    if not sidebar_state.block_ids:
        st.info("Select one or more blocks in the sidebar.")
        return

    tower = get_tower()
    index = get_index()
    selection = get_selection()
    debouncer = get_debouncer()
    design_names = {d.design_id: d.display_name for d in get_designs()}

    clicked = []
    blocks = [tower.get_block(bid) for bid in sidebar_state.block_ids]
    cols = st.columns(min(len(blocks), 3))
    for i, block in enumerate(b for b in blocks if b is not None):
        with cols[i % len(cols)]:
            if not block.floors:
                st.caption(f"Block {block.label}: no floors loaded")
                continue
            handle = unit_grid(block, selection.resolved_ids, design_names)
            event = st.plotly_chart(
                handle.figure, use_container_width=True,
                on_select="rerun", selection_mode=("points", "box", "lasso"),
                key=f"grid_{block.block_id}",
            )
            clicked.extend(handle.tokens_from_event(event))

    # Repeated identical selection events within the debounce window are ignored
    if clicked and debouncer.should_fire(tuple(sorted(clicked))):
        selection.set_tokens(clicked)
    if st.button("Clear selection", key="visual_clear"):
        selection.clear()
        for block in blocks:
            if block is not None:
                st.session_state.pop(f"grid_{block.block_id}", None)
        st.rerun()

    result = resolve_batch(selection.tokens, index)
    selection.set_resolved(result.resolved_ids)

    render_metric_row([
        {"label": "Clicked", "value": len(selection.tokens)},
        {"label": "Resolved units", "value": len(result.resolved_ids)},
        {"label": "Unresolved", "value": result.unresolved_count,
         "delta": -result.unresolved_count if result.unresolved_count else None},
    ])
    render_warnings(result.warnings)

    if selection.tokens:
        with st.expander("How the selection was resolved"):
            for step in explain_resolution(result, len(selection.tokens)):
                st.write(step)

    render_selection_table(selection_frame(tower, result.resolved_ids, design_names), "Selected units")
    render_assign_panel(result.resolved_ids, sidebar_state.design_id, key="visual")
