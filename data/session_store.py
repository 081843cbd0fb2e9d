"""Typed wrapper around st.session_state for the operator session."""

import asyncio
from typing import List, Optional

import streamlit as st

from data.client import InventoryClient
from data.snapshot_client import SnapshotClient
from engine.assignment import SelectionState
from engine.debounce import DebouncedEvent
from engine.inventory_index import InventoryIndex, build_index
from engine.loading import BlockLoader
from models.building import Tower
from models.design import Design
from models.outcome import AssignmentOutcome, SelectionWarning


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "source": None,            # "api" or "snapshot"
        "tower_id": None,
        "snapshot": None,          # (Tower, [Design]) when working from a file
        "tower": None,             # working tree, filled block by block
        "designs": [],
        "loader": None,
        "index": InventoryIndex(),
        "selection": SelectionState(),
        "debouncer": DebouncedEvent(),
        "load_warnings": [],
        "last_outcome": None,
        "data_loaded": False,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_tower() -> Optional[Tower]:
    return st.session_state.get("tower")


def get_designs() -> List[Design]:
    return st.session_state.get("designs", [])


def get_index() -> InventoryIndex:
    return st.session_state.get("index") or InventoryIndex()


def get_loader() -> Optional[BlockLoader]:
    return st.session_state.get("loader")


def get_selection() -> SelectionState:
    return st.session_state["selection"]


def get_debouncer() -> DebouncedEvent:
    return st.session_state["debouncer"]


def get_load_warnings() -> List[SelectionWarning]:
    loader = get_loader()
    warnings = list(st.session_state.get("load_warnings", []))
    if loader is not None:
        warnings.extend(loader.warnings)
    return warnings


def get_last_outcome() -> Optional[AssignmentOutcome]:
    return st.session_state.get("last_outcome")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def _rebuild_index(tower: Tower):
    st.session_state["index"] = build_index(tower)


def set_working_tower(tower: Tower, designs: List[Design], loader: BlockLoader):
    """Install a freshly loaded tower skeleton; the index follows every loader change."""
    loader.subscribe(_rebuild_index)
    st.session_state["tower"] = tower
    st.session_state["designs"] = designs
    st.session_state["loader"] = loader
    st.session_state["index"] = build_index(tower)
    st.session_state["selection"] = SelectionState()
    st.session_state["last_outcome"] = None
    st.session_state["data_loaded"] = True


def set_source(source: str, tower_id=None, snapshot=None):
    st.session_state["source"] = source
    st.session_state["tower_id"] = tower_id
    st.session_state["snapshot"] = snapshot


def set_load_warnings(warnings: List[SelectionWarning]):
    st.session_state["load_warnings"] = warnings


def set_last_outcome(outcome: Optional[AssignmentOutcome]):
    st.session_state["last_outcome"] = outcome


# --- Backing store access ---

def open_client():
    """A client for the current source. API clients are bound to one event loop, so open one per run."""
    if st.session_state.get("source") == "snapshot":
        tower, designs = st.session_state["snapshot"]
        return SnapshotClient(tower, designs)
    return InventoryClient()


def run_with_client(operation):
    """Run `await operation(client)` to completion with a client scoped to this call."""
    async def _runner():
        async with open_client() as client:
            loader = get_loader()
            if loader is not None:
                loader.client = client
            return await operation(client)
    return asyncio.run(_runner())
