"""Canonical visual key -> persisted unit id lookup built from the loaded tower tree."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config.defaults import UNIT_ID_VARIANT_PREFIX, VISUAL_KEY_PREFIX, VISUAL_KEY_SEPARATOR
from engine.key_normalizer import canonical_suffix
from models.building import Tower
from models.outcome import IndexConflict, SelectionWarning, INDEX_CONFLICT
from models.unit import Unit

logger = logging.getLogger(__name__)


def visual_key(block_label: str, floor_number, variant: str) -> str:
    """Build the rendering layer's key: unit-<blockLabel>-<floorNumber>-<variant>."""
    return VISUAL_KEY_SEPARATOR.join(
        [VISUAL_KEY_PREFIX, str(block_label), str(floor_number), str(variant)]
    )


def id_variant(unit_id: int) -> str:
    """Key variant carrying the persisted id, used by grid cells of unlabelled units."""
    return f"{UNIT_ID_VARIANT_PREFIX}{unit_id}"


def key_variants(unit: Unit, floor_code: Optional[str] = None) -> List[str]:
    """Raw unit number, raw unit code, then the canonical suffix of each; empties and repeats dropped.

    Floor-prefixed numbers also get their floor-relative suffix ("101" on floor 1 -> "1"),
    which is how the unit grid numbers units within a floor.
    """
    candidates = [
        unit.unit_number,
        unit.unit_code,
        canonical_suffix(unit.unit_number),
        canonical_suffix(unit.unit_code),
        canonical_suffix(unit.unit_number, floor_code),
        canonical_suffix(unit.unit_code, floor_code),
    ]
    variants = []
    for c in candidates:
        if c is None:
            continue
        c = str(c).strip()
        if c and c not in variants:
            variants.append(c)
    return variants


@dataclass
class InventoryIndex:
    keys: Dict[str, int] = field(default_factory=dict)
    units_by_id: Dict[int, Unit] = field(default_factory=dict)
    floor_of_unit: Dict[int, int] = field(default_factory=dict)
    floor_numbers: Dict[int, int] = field(default_factory=dict)  # floor_id -> floor_number
    conflicts: List[IndexConflict] = field(default_factory=list)

    def lookup(self, key: str) -> Optional[int]:
        return self.keys.get(key)

    def __contains__(self, key) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self.keys)

    @property
    def units(self) -> List[Unit]:
        return list(self.units_by_id.values())

    def conflict_warnings(self) -> List[SelectionWarning]:
        return [
            SelectionWarning(
                kind=INDEX_CONFLICT,
                message=(
                    f"Key '{c.key}' matches units {c.kept_unit_id} and {c.dropped_unit_id}; "
                    f"clicks on it select unit {c.kept_unit_id}. Check the unit labels."
                ),
                subject=c.key,
            )
            for c in self.conflicts
        ]


def build_index(tower: Optional[Tower]) -> InventoryIndex:
    """Index every loaded unit under each of its key variants.

    The first unit to claim a key keeps it. Traversal follows the tree as
    loaded (blocks, floors, units), so a given snapshot always yields the
    same winners.
    """
    index = InventoryIndex()
    if tower is None:
        return index

    for block, floor, unit in tower.iter_units():
        index.units_by_id.setdefault(unit.unit_id, unit)
        index.floor_of_unit.setdefault(unit.unit_id, floor.floor_id)
        index.floor_numbers.setdefault(floor.floor_id, floor.floor_number)

        floor_number = floor.floor_number if unit.floor_number is None else unit.floor_number
        for variant in key_variants(unit, floor.floor_code) + [id_variant(unit.unit_id)]:
            key = visual_key(block.label, floor_number, variant)
            existing = index.keys.get(key)
            if existing is None:
                index.keys[key] = unit.unit_id
            elif existing != unit.unit_id:
                index.conflicts.append(IndexConflict(key, existing, unit.unit_id))
                logger.warning("Visual key %s already maps to unit %s; unit %s not indexed under it",
                               key, existing, unit.unit_id)

    logger.debug("Built inventory index: %d keys, %d units, %d conflicts",
                 len(index.keys), len(index.units_by_id), len(index.conflicts))
    return index
