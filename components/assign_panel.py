"""Assign-design button shared by the visual and range selection tabs."""

import streamlit as st

from data.session_store import (
    get_last_outcome, get_loader, get_selection, run_with_client, set_last_outcome,
)
from engine.assignment import BulkAssignmentCoordinator
from engine.explainer import explain_assignment
from components.metrics_cards import render_warnings


def render_assign_panel(unit_ids, design_id, key: str):
    """Assign button for a resolved selection; keeps the selection when the store rejects it."""
    label = f"Assign design to {len(unit_ids)} units" if unit_ids else "Assign design"
    if st.button(label, key=f"assign_{key}", type="primary"):
        selection = get_selection()
        loader = get_loader()

        async def _assign(client):
            coordinator = BulkAssignmentCoordinator(client, selection, loader)
            return await coordinator.assign(unit_ids, design_id)

        outcome = run_with_client(_assign)
        set_last_outcome(outcome)
        if outcome.ok:
            # Clicked cells and range bounds live in widgets; drop them with the cleared selection
            for widget_key in [k for k in st.session_state.keys() if str(k).startswith(("grid_", "range_"))]:
                del st.session_state[widget_key]
            st.rerun()

    outcome = get_last_outcome()
    if outcome is None:
        return
    if outcome.ok:
        st.success(" · ".join(explain_assignment(outcome)))
        render_warnings(outcome.warnings)
    else:
        st.error(outcome.message)
