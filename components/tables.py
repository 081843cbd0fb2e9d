"""Styled dataframe display helpers."""

from typing import Dict, Iterable, Optional

import pandas as pd
import streamlit as st

from engine.range_selection import unit_suffix
from models.building import Tower


def selection_frame(tower: Optional[Tower], unit_ids: Iterable[int],
                    design_names: Optional[Dict[int, str]] = None) -> pd.DataFrame:
    """One row per selected unit, in tree order."""
    ids = set(unit_ids)
    design_names = design_names or {}
    rows = []
    if tower is not None:
        for block, floor, unit in tower.iter_units():
            if unit.unit_id not in ids:
                continue
            rows.append({
                "Unit ID": unit.unit_id,
                "Block": block.label,
                "Floor": floor.floor_code,
                "Unit Number": unit.unit_number or "",
                "Unit Code": unit.unit_code or "",
                "Suffix": unit_suffix(unit, floor.floor_code) or "",
                "Current Design": design_names.get(unit.design_id, "") if unit.has_design else "",
            })
    return pd.DataFrame(rows, columns=[
        "Unit ID", "Block", "Floor", "Unit Number", "Unit Code", "Suffix", "Current Design",
    ])


def render_selection_table(df: pd.DataFrame, title: Optional[str] = None, height: Optional[int] = None):
    """Render the selected units, highlighting ones that already carry a design."""
    if title:
        st.subheader(title)

    def color_design(val):
        return "color: #856404; font-weight: bold" if val else ""

    if "Current Design" in df.columns and not df.empty:
        st.dataframe(df.style.map(color_design, subset=["Current Design"]),
                     height=height, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, height=height, use_container_width=True, hide_index=True)
