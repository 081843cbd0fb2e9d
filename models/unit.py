from dataclasses import dataclass
from typing import Optional


@dataclass
class Unit:
    unit_id: int
    floor_id: int
    floor_number: Optional[int] = None
    unit_number: Optional[str] = None   # e.g. "101", "07"
    unit_code: Optional[str] = None     # e.g. "A-4-08", "PH2"
    design_id: Optional[int] = None

    @property
    def has_design(self) -> bool:
        return self.design_id is not None

    @property
    def display_label(self) -> str:
        return self.unit_number or self.unit_code or str(self.unit_id)
