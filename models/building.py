from dataclasses import dataclass, field
from typing import List, Optional

from models.unit import Unit


@dataclass
class Floor:
    floor_id: int
    block_id: int
    floor_number: int
    floor_code: str = ""
    units: List[Unit] = field(default_factory=list)

    def __post_init__(self):
        if not self.floor_code:
            self.floor_code = str(self.floor_number)


@dataclass
class Block:
    block_id: int
    label: str
    tower_id: Optional[int] = None
    floors: List[Floor] = field(default_factory=list)
    block_code: Optional[str] = None
    block_number: Optional[str] = None
    arabic_name: Optional[str] = None
    english_name: Optional[str] = None

    @property
    def floor_codes(self) -> List[str]:
        return [f.floor_code for f in self.floors]

    def iter_units(self):
        for floor in self.floors:
            for unit in floor.units:
                yield floor, unit


@dataclass
class Tower:
    tower_id: int
    name: str
    blocks: List[Block] = field(default_factory=list)

    def get_block(self, block_id: int) -> Optional[Block]:
        for b in self.blocks:
            if b.block_id == block_id:
                return b
        return None

    def get_floor(self, floor_id: int) -> Optional[Floor]:
        for b in self.blocks:
            for f in b.floors:
                if f.floor_id == floor_id:
                    return f
        return None

    def floor_of_unit(self, unit_id: int) -> Optional[Floor]:
        for _, floor, unit in self.iter_units():
            if unit.unit_id == unit_id:
                return floor
        return None

    def iter_units(self):
        """Yield (block, floor, unit) in natural traversal order."""
        for block in self.blocks:
            for floor, unit in block.iter_units():
                yield block, floor, unit

    @property
    def unit_ids(self) -> set:
        return {u.unit_id for _, _, u in self.iter_units()}
