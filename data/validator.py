"""Schema validation for uploaded inventory snapshots."""

from dataclasses import dataclass, field
from typing import List

import pandas as pd


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


INVENTORY_REQUIRED_COLUMNS = [
    "Block ID",
    "Block Label",
    "Floor ID",
    "Floor Number",
    "Unit ID",
]

INVENTORY_OPTIONAL_COLUMNS = [
    "Floor Code",
    "Unit Number",
    "Unit Code",
    "Design ID",
]

DESIGN_REQUIRED_COLUMNS = [
    "Design ID",
    "English Name",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _non_integer(series: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(series, errors="coerce")
    return series.notna() & (numeric.isna() | (numeric % 1 != 0))


def validate_inventory(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, INVENTORY_REQUIRED_COLUMNS, "Inventory")
    if not result.is_valid:
        return result

    for col in ["Block ID", "Floor ID", "Floor Number"]:
        if df[col].isna().any():
            result.is_valid = False
            result.errors.append(f"Inventory: {col} is required on every row.")
        elif _non_integer(df[col]).any():
            result.is_valid = False
            result.errors.append(f"Inventory: {col} must be a whole number.")

    if _non_integer(df["Unit ID"]).any():
        result.is_valid = False
        result.errors.append("Inventory: Unit ID must be a whole number.")
    if not result.is_valid:
        return result

    unit_rows = df[df["Unit ID"].notna()]
    dupes = unit_rows.duplicated(subset=["Unit ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(
            f"Inventory: Duplicate unit ids: {sorted(unit_rows[dupes]['Unit ID'].astype(str).unique().tolist())}"
        )

    # A floor must belong to exactly one block
    owners = df.groupby("Floor ID")["Block ID"].nunique()
    shared = owners[owners > 1]
    if not shared.empty:
        result.is_valid = False
        result.errors.append(f"Inventory: Floors listed under more than one block: {shared.index.tolist()}")

    if "Unit Number" not in df.columns and "Unit Code" not in df.columns:
        result.warnings.append("Inventory: No Unit Number or Unit Code column; units can only be matched by id.")
    elif "Unit Number" in df.columns:
        labelled = unit_rows[unit_rows["Unit Number"].notna()]
        same_label = labelled.duplicated(subset=["Floor ID", "Unit Number"], keep=False)
        if same_label.any():
            clashes = labelled[same_label][["Floor ID", "Unit Number"]].drop_duplicates().to_dict("records")
            result.warnings.append(f"Inventory: Units sharing a number on the same floor: {clashes}")

    return result


def validate_designs(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, DESIGN_REQUIRED_COLUMNS, "Design Catalog")
    if not result.is_valid:
        return result

    dupes = df.duplicated(subset=["Design ID"], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(f"Design Catalog: Duplicate design ids: {df[dupes]['Design ID'].unique().tolist()}")
    return result
