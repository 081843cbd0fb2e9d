"""Floor/unit range selection evaluated directly against the loaded tower tree."""

import logging
from typing import Dict, Iterable, List, Optional

from engine.key_normalizer import canonical_suffix, in_range, sort_endpoints
from models.building import Block, Floor, Tower
from models.outcome import (
    CompatibilityResult, ResolutionResult, SelectionWarning, FLOOR_INCOMPATIBILITY,
)

logger = logging.getLogger(__name__)


def _selected_blocks(block_ids: Iterable[int], tower: Optional[Tower]) -> List[Block]:
    if tower is None:
        return []
    blocks = []
    for bid in block_ids or []:
        block = tower.get_block(bid)
        if block is not None and block not in blocks:
            blocks.append(block)
    return blocks


def _floors_in_range(blocks: List[Block], floor_from, floor_to) -> List[Floor]:
    return [
        f for b in blocks for f in b.floors
        if in_range(f.floor_code, floor_from, floor_to)
    ]


def _is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def unit_suffix(unit, floor_code=None) -> Optional[str]:
    """The suffix a unit is ranged by: its unit number's, else its unit code's."""
    suffix = canonical_suffix(unit.unit_number, floor_code)
    if suffix is None:
        suffix = canonical_suffix(unit.unit_code, floor_code)
    return suffix


def check_compatibility(block_ids: Iterable[int], tower: Optional[Tower]) -> CompatibilityResult:
    """Blocks are compatible when their sorted floor-code lists are identical.

    Incompatibility is reported as a warning; range selection still runs per block.
    """
    blocks = _selected_blocks(block_ids, tower)
    codes_by_block: Dict[int, List[str]] = {
        b.block_id: sort_endpoints(b.floor_codes) for b in blocks
    }
    if not codes_by_block:
        return CompatibilityResult(compatible=True)

    reference = next(iter(codes_by_block.values()))
    compatible = all(codes == reference for codes in codes_by_block.values())
    if compatible:
        return CompatibilityResult(compatible=True, floor_codes_by_block=codes_by_block)

    detail = "; ".join(
        f"{b.label}: {', '.join(codes_by_block[b.block_id]) or 'no floors'}" for b in blocks
    )
    logger.info("Selected blocks have different floor sets: %s", detail)
    return CompatibilityResult(
        compatible=False,
        floor_codes_by_block=codes_by_block,
        warning=SelectionWarning(
            kind=FLOOR_INCOMPATIBILITY,
            message=f"Selected blocks do not share the same floors ({detail}). "
                    "Ranges are applied to each block separately.",
        ),
    )


def available_floor_codes(block_ids: Iterable[int], tower: Optional[Tower]) -> List[str]:
    """Union of floor codes across the selected blocks, sorted."""
    codes = {f.floor_code for b in _selected_blocks(block_ids, tower) for f in b.floors}
    return sort_endpoints(codes)


def available_unit_suffixes(
    block_ids: Iterable[int],
    floor_from,
    floor_to,
    tower: Optional[Tower],
) -> List[str]:
    """Canonical suffixes of every unit on the selected floors, sorted."""
    if _is_blank(floor_from) or _is_blank(floor_to):
        return []
    blocks = _selected_blocks(block_ids, tower)
    suffixes = set()
    for floor in _floors_in_range(blocks, floor_from, floor_to):
        for unit in floor.units:
            suffix = unit_suffix(unit, floor.floor_code)
            if suffix is not None:
                suffixes.add(suffix)
    return sort_endpoints(suffixes)


def resolve_range(
    block_ids: Iterable[int],
    floor_from,
    floor_to,
    unit_from,
    unit_to,
    tower: Optional[Tower],
) -> frozenset:
    """Unit ids on floors [floor_from, floor_to] whose suffix lies in [unit_from, unit_to].

    Unit bounds are normalized against each floor's code the same way unit
    labels are, so "101" and "1" are the same bound on floor 1.
    Nothing is selected until all four bounds are given.
    """
    if any(_is_blank(v) for v in (floor_from, floor_to, unit_from, unit_to)):
        return frozenset()
    blocks = _selected_blocks(block_ids, tower)

    selected = set()
    for floor in _floors_in_range(blocks, floor_from, floor_to):
        low = canonical_suffix(unit_from, floor.floor_code)
        high = canonical_suffix(unit_to, floor.floor_code)
        for unit in floor.units:
            suffix = unit_suffix(unit, floor.floor_code)
            if suffix is not None and in_range(suffix, low, high):
                selected.add(unit.unit_id)
    return frozenset(selected)


def run_range_selection(
    block_ids: Iterable[int],
    floor_from,
    floor_to,
    unit_from,
    unit_to,
    tower: Optional[Tower],
) -> ResolutionResult:
    """resolve_range plus the floor compatibility warning, packaged for the UI."""
    block_ids = list(block_ids or [])
    compatibility = check_compatibility(block_ids, tower)
    ids = resolve_range(block_ids, floor_from, floor_to, unit_from, unit_to, tower)
    warnings = [compatibility.warning] if compatibility.warning else []
    return ResolutionResult(resolved_ids=ids, warnings=warnings)
