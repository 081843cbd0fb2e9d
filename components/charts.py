"""Plotly chart builders for the Unit Design Planner."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd

from config.defaults import COLOR_ASSIGNED, COLOR_SELECTED, COLOR_UNASSIGNED
from engine.inventory_index import id_variant, visual_key
from engine.key_normalizer import endpoint_sort_key
from engine.range_selection import unit_suffix
from models.building import Block


@dataclass
class VisualSelectionHandle:
    """What the unit grid hands back to its caller: the figure and the token behind every cell."""
    figure: go.Figure
    tokens: List[str] = field(default_factory=list)

    def tokens_from_event(self, event) -> List[str]:
        """Tokens of the cells picked in a Streamlit plotly selection event."""
        if not event:
            return []
        selection = event.get("selection", {}) if isinstance(event, dict) else getattr(event, "selection", {})
        points = selection.get("points", []) if selection else []
        picked = []
        for p in points:
            token = p.get("customdata")
            if isinstance(token, (list, tuple)):
                token = token[0] if token else None
            if token is None:
                idx = p.get("point_index", p.get("point_number"))
                if idx is not None and 0 <= idx < len(self.tokens):
                    token = self.tokens[idx]
            if token is not None and token not in picked:
                picked.append(token)
        return picked


def unit_grid(
    block: Block,
    selected_ids: Optional[Iterable[int]] = None,
    design_names: Optional[Dict[int, str]] = None,
) -> VisualSelectionHandle:
    """One cell per unit, floors stacked bottom to top, units left to right.

    Each cell carries the visual token unit-<block>-<floor>-<suffix>, the
    suffix being the unit's floor-relative label ("101" on floor 1 -> "1").
    Units with no label carry their persisted id instead ("id1042").
    """
    selected = set(selected_ids or ())
    design_names = design_names or {}
    xs, ys, colors, texts, hovers, tokens = [], [], [], [], [], []

    floors = sorted(block.floors, key=lambda f: endpoint_sort_key(f.floor_code))
    for floor in floors:
        for position, unit in enumerate(floor.units, start=1):
            variant = unit_suffix(unit, floor.floor_code) or id_variant(unit.unit_id)
            tokens.append(visual_key(block.label, floor.floor_number, variant))
            xs.append(position)
            ys.append(floor.floor_code)
            texts.append(unit.display_label)
            if unit.unit_id in selected:
                colors.append(COLOR_SELECTED)
            elif unit.has_design:
                colors.append(COLOR_ASSIGNED)
            else:
                colors.append(COLOR_UNASSIGNED)
            design = design_names.get(unit.design_id, "—") if unit.has_design else "—"
            hovers.append(f"Unit {unit.display_label}<br>Floor {floor.floor_code}<br>Design: {design}")

    fig = go.Figure(data=go.Scatter(
        x=xs,
        y=ys,
        mode="markers+text",
        marker=dict(symbol="square", size=34, color=colors, line=dict(width=1, color="#333")),
        text=texts,
        textfont=dict(size=9, color="white"),
        customdata=tokens,
        hovertext=hovers,
        hoverinfo="text",
    ))
    fig.update_layout(
        title=f"Block {block.label}",
        xaxis=dict(visible=False),
        yaxis=dict(type="category", categoryorder="array",
                   categoryarray=[f.floor_code for f in floors], title="Floor"),
        height=max(300, len(floors) * 45 + 120),
        dragmode="select",
        clickmode="event+select",
        showlegend=False,
    )
    return VisualSelectionHandle(figure=fig, tokens=tokens)


def design_coverage_bar(blocks: List[Block], title: str = "Design Coverage by Block") -> go.Figure:
    """Bar chart of assigned vs unassigned units per block."""
    rows = []
    for b in blocks:
        units = [u for _, u in b.iter_units()]
        assigned = sum(1 for u in units if u.has_design)
        rows.append({"block": b.label, "Assigned": assigned, "Unassigned": len(units) - assigned})
    df = pd.DataFrame(rows, columns=["block", "Assigned", "Unassigned"])
    fig = px.bar(
        df, x="block", y=["Assigned", "Unassigned"],
        barmode="stack",
        labels={"value": "Units", "block": "Block", "variable": ""},
        title=title,
        color_discrete_map={"Assigned": COLOR_ASSIGNED, "Unassigned": COLOR_UNASSIGNED},
    )
    fig.update_layout(legend_title_text="", height=350)
    return fig
