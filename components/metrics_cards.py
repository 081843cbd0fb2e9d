"""Reusable KPI metric card widgets."""

import streamlit as st

from models.outcome import SelectionWarning, FLOOR_INCOMPATIBILITY, UNRESOLVED_TOKEN


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_alert_card(message: str, level: str = "warning"):
    """Render an alert card with appropriate styling."""
    if level == "error":
        st.error(message, icon="🔴")
    elif level == "warning":
        st.warning(message, icon="🟡")
    else:
        st.info(message, icon="🔵")


def render_warnings(warnings: list[SelectionWarning]):
    """Show accumulated selection/load warnings, grouping unresolved tokens into one card."""
    unresolved = [w for w in warnings if w.kind == UNRESOLVED_TOKEN]
    if unresolved:
        render_alert_card(
            f"{len(unresolved)} clicked shapes could not be matched to units and were left out: "
            + ", ".join(w.subject for w in unresolved if w.subject),
        )
    for w in warnings:
        if w.kind == UNRESOLVED_TOKEN:
            continue
        render_alert_card(w.message, "info" if w.kind == FLOOR_INCOMPATIBILITY else "warning")
