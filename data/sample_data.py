"""Generate a synthetic tower inventory for the Unit Design Planner."""

import os
import random

import pandas as pd


def generate_inventory_df() -> pd.DataFrame:
    """Three blocks with deliberately inconsistent labelling.

    Block A: floors G,1-5, units numbered floor+index ("101", "102").
    Block B: floors G,1-5, units coded "B-<floor>-<index>" with zero padding.
    Block C: floors 1-3 only, plain two-digit numbers ("01", "02").
    """
    random.seed(42)
    rows = []
    floor_id = 100
    unit_id = 1000

    layouts = [
        (1, "A", ["G", "1", "2", "3", "4", "5"], 4),
        (2, "B", ["G", "1", "2", "3", "4", "5"], 4),
        (3, "C", ["1", "2", "3"], 6),
    ]
    for block_id, label, floor_codes, units_per_floor in layouts:
        for code in floor_codes:
            floor_id += 1
            floor_number = 0 if code == "G" else int(code)
            for idx in range(1, units_per_floor + 1):
                unit_id += 1
                if label == "A":
                    number, unit_code = f"{floor_number}{idx:02d}", None
                elif label == "B":
                    number, unit_code = None, f"B-{floor_number}-{idx:02d}"
                else:
                    number, unit_code = f"{idx:02d}", None
                rows.append({
                    "Block ID": block_id,
                    "Block Label": label,
                    "Floor ID": floor_id,
                    "Floor Number": floor_number,
                    "Floor Code": code,
                    "Unit ID": unit_id,
                    "Unit Number": number,
                    "Unit Code": unit_code,
                    "Design ID": random.choice([None, None, 1, 2]),
                })
    return pd.DataFrame(rows)


def generate_designs_df() -> pd.DataFrame:
    return pd.DataFrame([
        {"Design ID": 1, "English Name": "Studio", "Arabic Name": "استوديو"},
        {"Design ID": 2, "English Name": "One Bedroom", "Arabic Name": "غرفة نوم واحدة"},
        {"Design ID": 3, "English Name": "Two Bedroom", "Arabic Name": "غرفتا نوم"},
        {"Design ID": 4, "English Name": "Penthouse", "Arabic Name": "بنتهاوس"},
    ])


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_inventory_df().to_csv(os.path.join(output_dir, "inventory.csv"), index=False)
    generate_designs_df().to_csv(os.path.join(output_dir, "designs.csv"), index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    print("Sample CSV files generated in sample_files/")
