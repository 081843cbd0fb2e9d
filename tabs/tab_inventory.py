"""Tab 1: Inventory — load a tower from the store or from a snapshot file."""

import pandas as pd
import streamlit as st

from components.charts import design_coverage_bar
from components.metrics_cards import render_metric_row, render_warnings
from data.errors import DataLoadError
from data.loader import load_file, parse_designs, parse_inventory
from data.sample_data import generate_designs_df, generate_inventory_df
from data.session_store import (
    get_index, get_load_warnings, get_tower, is_data_loaded, run_with_client,
    set_load_warnings, set_source, set_working_tower,
)
from data.validator import validate_designs, validate_inventory
from engine.loading import BlockLoader


def _start_session(tower_id: int):
    """Fetch the tower skeleton (blocks only) and the design catalog from the current source."""
    async def _load(client):
        tower = await client.get_tower(tower_id)
        tower.blocks = await client.get_blocks(tower_id)
        designs = await client.get_designs()
        return tower, designs

    try:
        tower, designs = run_with_client(_load)
    except DataLoadError as e:
        st.error(f"Could not load tower {tower_id}: {e}")
        return
    set_working_tower(tower, designs, BlockLoader(None, tower))
    st.session_state.pop("sidebar_blocks", None)
    st.success(f"Tower '{tower.name}' loaded with {len(tower.blocks)} blocks. Select blocks in the sidebar.")


def _load_snapshot(inventory_df: pd.DataFrame, designs_df: pd.DataFrame, tower_name: str):
    errors, warnings = [], []
    inv = validate_inventory(inventory_df)
    des = validate_designs(designs_df)
    for r in [inv, des]:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if errors:
        for e in errors:
            st.error(e)
        return
    for w in warnings:
        st.warning(w)

    snapshot_tower = parse_inventory(inventory_df, tower_id=1, tower_name=tower_name)
    designs = parse_designs(designs_df)
    set_source("snapshot", tower_id=snapshot_tower.tower_id, snapshot=(snapshot_tower, designs))
    set_load_warnings([])
    _start_session(snapshot_tower.tower_id)


def render(sidebar_state):
    """Render the Inventory tab."""
    st.header("Inventory")

    source = st.radio("Source", ["Backing store", "Snapshot file"], horizontal=True, key="inventory_source")

    if source == "Backing store":
        tower_id = st.number_input("Tower ID", min_value=1, step=1, key="inventory_tower_id")
        if st.button("Load tower", key="inventory_load_api"):
            set_source("api", tower_id=int(tower_id))
            set_load_warnings([])
            _start_session(int(tower_id))
    else:
        col1, col2 = st.columns(2)
        with col1:
            inv_file = st.file_uploader("Inventory (CSV/XLSX)", type=["csv", "xlsx"], key="inventory_file")
            design_file = st.file_uploader("Design catalog (CSV/XLSX)", type=["csv", "xlsx"], key="design_file")
            if st.button("Load snapshot", key="inventory_load_file", disabled=inv_file is None or design_file is None):
                try:
                    _load_snapshot(load_file(inv_file), load_file(design_file), inv_file.name)
                except ValueError as e:
                    st.error(str(e))
        with col2:
            st.caption("No file at hand? Load a generated three-block tower with mixed unit labels.")
            if st.button("Use sample tower", key="inventory_sample"):
                _load_snapshot(generate_inventory_df(), generate_designs_df(), "Sample Tower")

    if not is_data_loaded():
        return

    st.divider()
    tower = get_tower()
    index = get_index()
    loaded_blocks = [b for b in tower.blocks if b.floors]

    render_metric_row([
        {"label": "Blocks", "value": len(tower.blocks)},
        {"label": "Blocks loaded", "value": len(loaded_blocks)},
        {"label": "Units loaded", "value": len(index.units_by_id)},
        {"label": "Key conflicts", "value": len(index.conflicts)},
    ])

    render_warnings(get_load_warnings() + index.conflict_warnings())

    if loaded_blocks:
        st.plotly_chart(design_coverage_bar(loaded_blocks), use_container_width=True)
        floors = [{
            "Block": b.label,
            "Floor": f.floor_code,
            "Floor #": f.floor_number,
            "Units": len(f.units),
            "With design": sum(1 for u in f.units if u.has_design),
        } for b in loaded_blocks for f in b.floors]
        st.dataframe(pd.DataFrame(floors), use_container_width=True, hide_index=True)
