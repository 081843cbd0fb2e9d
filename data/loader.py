"""Record parsing: store JSON rows and CSV/XLSX inventory snapshots into typed models."""

from typing import Any, Dict, Optional

import pandas as pd

from config.defaults import BLOCK_LABEL_FIELDS
from models.building import Block, Floor, Tower
from models.design import Design
from models.unit import Unit


def _clean(value) -> Optional[str]:
    """Stringify a label, mapping None/NaN/blank to None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _optional_int(value) -> Optional[int]:
    text = _clean(value)
    if text is None:
        return None
    try:
        return int(float(text))
    except ValueError:
        return None


def block_label(record: Dict[str, Any]) -> str:
    """First present of blockCode, blockArabicName, blockEnglishName, blockNumber."""
    for key in BLOCK_LABEL_FIELDS:
        label = _clean(record.get(key))
        if label:
            return label
    # Summary DTOs use the unprefixed names
    for key in ("code", "arabicName", "englishName"):
        label = _clean(record.get(key))
        if label:
            return label
    return str(record.get("id"))


# --- Store JSON records ---

def parse_block_record(record: Dict[str, Any], tower_id: Optional[int] = None) -> Block:
    return Block(
        block_id=int(record["id"]),
        label=block_label(record),
        tower_id=tower_id,
        block_code=_clean(record.get("blockCode")),
        block_number=_clean(record.get("blockNumber")),
        arabic_name=_clean(record.get("blockArabicName")),
        english_name=_clean(record.get("blockEnglishName")),
    )


def parse_floor_record(record: Dict[str, Any], block_id: int) -> Floor:
    floor_number = _optional_int(record.get("floorNumber"))
    return Floor(
        floor_id=int(record["id"]),
        block_id=block_id,
        floor_number=floor_number if floor_number is not None else 0,
        floor_code=_clean(record.get("floorCode")) or "",
    )


def parse_unit_record(record: Dict[str, Any], floor_id: int) -> Unit:
    design_id = _optional_int(record.get("unitDesignId"))
    if design_id is None and isinstance(record.get("unitDesign"), dict):
        design_id = _optional_int(record["unitDesign"].get("id"))
    return Unit(
        unit_id=int(record["id"]),
        floor_id=floor_id,
        floor_number=_optional_int(record.get("floorNumber")),
        unit_number=_clean(record.get("unitNumber")),
        unit_code=_clean(record.get("unitCode")),
        design_id=design_id,
    )


def parse_design_record(record: Dict[str, Any]) -> Design:
    return Design(
        design_id=int(record["id"]),
        english_name=_clean(record.get("englishName")),
        arabic_name=_clean(record.get("arabicName")),
    )


# --- Inventory snapshots ---

def parse_inventory(df: pd.DataFrame, tower_id: int = 0, tower_name: str = "Tower") -> Tower:
    """Convert a flat inventory table (one row per unit) into a Tower tree.

    Row order is preserved: blocks, floors and units appear in the order they
    are first seen, which is the traversal order the index relies on.
    """
    tower = Tower(tower_id=tower_id, name=tower_name)
    blocks: Dict[int, Block] = {}
    floors: Dict[int, Floor] = {}

    for _, row in df.iterrows():
        block_id = int(row["Block ID"])
        block = blocks.get(block_id)
        if block is None:
            label = _clean(row.get("Block Label")) or str(block_id)
            block = Block(block_id=block_id, label=label, tower_id=tower_id, block_code=label)
            blocks[block_id] = block
            tower.blocks.append(block)

        floor_id = int(row["Floor ID"])
        floor = floors.get(floor_id)
        if floor is None:
            floor = Floor(
                floor_id=floor_id,
                block_id=block_id,
                floor_number=int(row["Floor Number"]),
                floor_code=_clean(row.get("Floor Code")) or "",
            )
            floors[floor_id] = floor
            block.floors.append(floor)

        unit_id = _optional_int(row.get("Unit ID"))
        if unit_id is None:
            continue  # floor without units
        floor.units.append(Unit(
            unit_id=unit_id,
            floor_id=floor_id,
            floor_number=floor.floor_number,
            unit_number=_clean(row.get("Unit Number")),
            unit_code=_clean(row.get("Unit Code")),
            design_id=_optional_int(row.get("Design ID")),
        ))
    return tower


def parse_designs(df: pd.DataFrame) -> list:
    """Convert a design catalog table into Design objects."""
    designs = []
    for _, row in df.iterrows():
        designs.append(Design(
            design_id=int(row["Design ID"]),
            english_name=_clean(row.get("English Name")),
            arabic_name=_clean(row.get("Arabic Name")),
        ))
    return designs


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file, dtype=str)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl", dtype=str)
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


def load_csv_path(path: str) -> pd.DataFrame:
    """Load a CSV file from a local path."""
    return pd.read_csv(path, dtype=str)
