from dataclasses import dataclass
from typing import Optional


@dataclass
class Design:
    design_id: int
    english_name: Optional[str] = None
    arabic_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.english_name or self.arabic_name or f"Design {self.design_id}"
