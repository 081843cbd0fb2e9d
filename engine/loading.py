"""Per-block loading of floors and units into the in-memory tower tree."""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set

from data.errors import DataLoadError
from models.building import Floor, Tower
from models.outcome import SelectionWarning, DATA_LOAD_FAILURE

logger = logging.getLogger(__name__)


class CancellationToken:
    """Marks a load as superseded. Checked before results are committed; never aborts I/O."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class BlockLoader:
    """Fetches a block's floors, then each floor's units, one request at a time.

    A block is loaded at most once while it stays selected; deselecting it
    drops its subtree and cancels any load still in flight so the late
    result is discarded instead of written back.
    """

    def __init__(self, client, tower: Tower):
        self.client = client
        self.tower = tower
        self.warnings: List[SelectionWarning] = []
        self._fetched: Set[int] = set()
        self._in_flight: Dict[int, CancellationToken] = {}
        self._listeners: List[Callable[[Tower], None]] = []

    def subscribe(self, listener: Callable[[Tower], None]):
        """Call listener(tower) whenever the loaded unit set changes."""
        self._listeners.append(listener)

    def _changed(self):
        for listener in self._listeners:
            listener(self.tower)

    def is_fetched(self, block_id: int) -> bool:
        return block_id in self._fetched

    def is_loading(self, block_id: int) -> bool:
        return block_id in self._in_flight

    def _warn(self, message: str, subject: str, **extra):
        logger.warning(message, extra=extra)
        self.warnings.append(SelectionWarning(kind=DATA_LOAD_FAILURE, message=message, subject=subject))

    async def ensure_loaded(self, block_id: int) -> bool:
        """Load a block unless it is already loaded or loading. Returns True if data was committed."""
        if block_id in self._fetched or block_id in self._in_flight:
            return False
        block = self.tower.get_block(block_id)
        if block is None:
            logger.warning("Block %s is not part of tower %s", block_id, self.tower.tower_id)
            return False

        token = CancellationToken()
        self._in_flight[block_id] = token
        try:
            floors = await self.client.get_floors(block_id)
            for floor in floors:
                if token.cancelled:
                    break
                try:
                    floor.units = await self.client.get_units(floor.floor_id)
                except DataLoadError as e:
                    floor.units = []
                    if not token.cancelled:
                        self._warn(f"Units of floor {floor.floor_code} in block {block.label} "
                                   f"failed to load: {e}", subject=str(floor.floor_id),
                                   block_id=block_id, floor_id=floor.floor_id)
        except DataLoadError as e:
            if not token.cancelled:
                self._warn(f"Floors of block {block.label} failed to load: {e}", subject=str(block_id),
                           block_id=block_id)
            return False
        finally:
            if self._in_flight.get(block_id) is token:
                del self._in_flight[block_id]

        if token.cancelled:
            logger.info("Discarding stale load of block %s", block_id)
            return False

        block.floors = floors
        self._fetched.add(block_id)
        logger.info("Loaded block %s: %d floors, %d units", block.label, len(floors),
                    sum(len(f.units) for f in floors), extra={"block_id": block_id})
        self._changed()
        return True

    def forget(self, block_id: int):
        """Deselect a block: cancel its load, drop its subtree, clear its fetched marker."""
        token = self._in_flight.pop(block_id, None)
        if token is not None:
            token.cancel()
        was_loaded = block_id in self._fetched
        self._fetched.discard(block_id)
        block = self.tower.get_block(block_id)
        if block is not None and block.floors:
            block.floors = []
        if was_loaded:
            self._changed()

    async def sync_selection(self, block_ids: Iterable[int]) -> List[int]:
        """Make the loaded set match the selection. Returns the ids newly loaded."""
        wanted = list(dict.fromkeys(block_ids))
        for block_id in list(self._fetched | set(self._in_flight)):
            if block_id not in wanted:
                self.forget(block_id)

        loaded = []
        for block_id in wanted:
            if await self.ensure_loaded(block_id):
                loaded.append(block_id)
        return loaded

    async def refresh_floor(self, floor_id: int) -> Optional[Floor]:
        """Re-fetch one floor's units. Raises DataLoadError; skips floors dropped meanwhile."""
        floor = self.tower.get_floor(floor_id)
        if floor is None:
            return None
        units = await self.client.get_units(floor_id)
        if self.tower.get_floor(floor_id) is not floor:
            logger.info("Floor %s was unloaded during refresh; result discarded", floor_id,
                        extra={"floor_id": floor_id})
            return None
        floor.units = units
        self._changed()
        return floor
