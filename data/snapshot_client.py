"""In-memory stand-in for the backing store, serving an inventory snapshot."""

import copy
import logging
from typing import Iterable, List, Optional

from data.errors import AssignmentError, DataLoadError
from models.building import Block, Floor, Tower
from models.design import Design
from models.unit import Unit

logger = logging.getLogger(__name__)


class SnapshotClient:
    """Serves a Tower loaded from a file through the same async calls as InventoryClient.

    Returned records are copies, so the working tree never aliases the snapshot.
    """

    def __init__(self, tower: Tower, designs: Optional[List[Design]] = None):
        self.tower = tower
        self.designs = list(designs or [])

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        pass

    async def get_tower(self, tower_id: int) -> Tower:
        if tower_id != self.tower.tower_id:
            raise DataLoadError(f"Tower {tower_id} not found", 404)
        return Tower(tower_id=self.tower.tower_id, name=self.tower.name)

    async def get_blocks(self, tower_id: int) -> List[Block]:
        if tower_id != self.tower.tower_id:
            raise DataLoadError(f"Tower {tower_id} not found", 404)
        return [Block(
            block_id=b.block_id, label=b.label, tower_id=b.tower_id, block_code=b.block_code,
            block_number=b.block_number, arabic_name=b.arabic_name, english_name=b.english_name,
        ) for b in self.tower.blocks]

    async def get_floors(self, block_id: int) -> List[Floor]:
        block = self.tower.get_block(block_id)
        if block is None:
            raise DataLoadError(f"Block {block_id} not found", 404)
        return [Floor(f.floor_id, f.block_id, f.floor_number, f.floor_code) for f in block.floors]

    async def get_units(self, floor_id: int) -> List[Unit]:
        floor = self.tower.get_floor(floor_id)
        if floor is None:
            raise DataLoadError(f"Floor {floor_id} not found", 404)
        return copy.deepcopy(floor.units)

    async def get_designs(self) -> List[Design]:
        return list(self.designs)

    async def assign_design(self, unit_ids: Iterable[int], design_id: int) -> str:
        ids = set(unit_ids)
        if self.designs and design_id not in {d.design_id for d in self.designs}:
            raise AssignmentError(f"Design {design_id} not found", 404)
        units = {u.unit_id: u for _, _, u in self.tower.iter_units()}
        missing = sorted(ids - set(units))
        if missing:
            raise AssignmentError(f"Units not found: {missing}", 404)
        for unit_id in ids:
            units[unit_id].design_id = design_id
        logger.info("Snapshot: assigned design %s to %d units", design_id, len(ids))
        return f"Design assigned to {len(ids)} units."
