"""Best-effort reconciliation of ephemeral visual tokens with persisted unit ids.

Resolution is a cascade of independent strategies tried in order; the first
one that returns an id wins. Each strategy takes the token, the index and the
raw unit list and returns a unit id or None, so a new label convention is a
new function appended to RESOLUTION_STRATEGIES.
"""

import logging
import re
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from config.defaults import (
    VISUAL_KEY_PREFIX, VISUAL_KEY_SEPARATOR, MIN_STRUCTURED_SEGMENTS,
    TOKEN_SEGMENT_SEPARATORS,
)
from engine.inventory_index import InventoryIndex
from engine.key_normalizer import last_digit_run, parse_int, trailing_digits
from models.outcome import ResolutionResult, SelectionWarning, UNRESOLVED_TOKEN
from models.unit import Unit

logger = logging.getLogger(__name__)

Strategy = Callable[[str, InventoryIndex, List[Unit]], Optional[int]]

_SEGMENT_SPLIT = re.compile("[" + re.escape(TOKEN_SEGMENT_SEPARATORS) + "]")


def _unit_with_id(units: List[Unit], unit_id: int) -> Optional[int]:
    for u in units:
        if u.unit_id == unit_id:
            return u.unit_id
    return None


def _match_numeric_run(run: str, units: List[Unit]) -> Optional[int]:
    """A digit run names a unit either by id or by its unit number/code verbatim."""
    found = _unit_with_id(units, int(run))
    if found is not None:
        return found
    for u in units:
        if (u.unit_number is not None and str(u.unit_number) == run) or \
                (u.unit_code is not None and str(u.unit_code) == run):
            return u.unit_id
    return None


# --- Strategies ---

def direct_hit(token: str, index: InventoryIndex, units: List[Unit]) -> Optional[int]:
    return index.lookup(token)


def parse_structured_token(token: str) -> Optional[Tuple[str, int, int]]:
    """Split unit-<block>-<floor>-<unitLabel> into (block, floor, unit label).

    The block label may itself contain dashes, so floor and unit are taken
    from the end. Floor and unit label must be integers.
    """
    segments = token.split(VISUAL_KEY_SEPARATOR)
    if len(segments) < MIN_STRUCTURED_SEGMENTS or segments[0] != VISUAL_KEY_PREFIX:
        return None
    floor = parse_int(segments[-2])
    unit_label = parse_int(segments[-1])
    if floor is None or unit_label is None:
        return None
    block = VISUAL_KEY_SEPARATOR.join(segments[1:-2])
    return block, floor, unit_label


def structured_pattern(token: str, index: InventoryIndex, units: List[Unit]) -> Optional[int]:
    parsed = parse_structured_token(token)
    if parsed is None:
        return None
    _, floor, unit_label = parsed
    for u in units:
        floor_number = u.floor_number
        if floor_number is None:
            floor_number = index.floor_numbers.get(index.floor_of_unit.get(u.unit_id))
        if floor_number != floor:
            continue
        if parse_int(u.unit_number) == unit_label:
            return u.unit_id
        code_run = trailing_digits(u.unit_code)
        if code_run is not None and int(code_run) == unit_label:
            return u.unit_id
    return None


def literal_id(token: str, index: InventoryIndex, units: List[Unit]) -> Optional[int]:
    if not token.isdecimal():
        return None
    return _unit_with_id(units, int(token))


def trailing_numeric_run(token: str, index: InventoryIndex, units: List[Unit]) -> Optional[int]:
    run = last_digit_run(token)
    if run is None:
        return None
    return _match_numeric_run(run, units)


def segment_scan(token: str, index: InventoryIndex, units: List[Unit]) -> Optional[int]:
    for segment in _SEGMENT_SPLIT.split(token):
        if segment.isdecimal():
            found = _match_numeric_run(segment, units)
            if found is not None:
                return found
    return None


RESOLUTION_STRATEGIES: List[Tuple[str, Strategy]] = [
    ("direct_hit", direct_hit),
    ("structured_pattern", structured_pattern),
    ("literal_id", literal_id),
    ("trailing_numeric_run", trailing_numeric_run),
    ("segment_scan", segment_scan),
]


def resolve_token(
    token: str,
    index: InventoryIndex,
    raw_units: Optional[List[Unit]] = None,
) -> Tuple[Optional[int], Optional[str]]:
    """Resolve one token. Returns (unit_id, strategy name) or (None, None) when unresolved."""
    if token is None:
        return None, None
    token = str(token).strip()
    if not token:
        return None, None
    units = index.units if raw_units is None else list(raw_units)
    known_ids = set(index.units_by_id) | {u.unit_id for u in units}

    for name, strategy in RESOLUTION_STRATEGIES:
        unit_id = strategy(token, index, units)
        if unit_id is not None and unit_id in known_ids:
            logger.debug("Token %r resolved to unit %s via %s", token, unit_id, name)
            return unit_id, name
    return None, None


def resolve_batch(
    tokens: Iterable[str],
    index: InventoryIndex,
    raw_units: Optional[List[Unit]] = None,
) -> ResolutionResult:
    """Resolve many tokens, deduplicating ids and reporting every token that failed."""
    units = index.units if raw_units is None else list(raw_units)
    resolved = set()
    matched_by: Dict[str, str] = {}
    unresolved: List[str] = []
    warnings: List[SelectionWarning] = []

    seen = set()
    for token in tokens:
        if token in seen:
            continue
        seen.add(token)
        unit_id, strategy = resolve_token(token, index, units)
        if unit_id is None:
            unresolved.append(token)
            warnings.append(SelectionWarning(
                kind=UNRESOLVED_TOKEN,
                message=f"Could not match '{token}' to a loaded unit; it was left out of the selection.",
                subject=token,
            ))
            continue
        resolved.add(unit_id)
        matched_by[token] = strategy

    if unresolved:
        logger.warning("%d of %d selection tokens unresolved: %s",
                       len(unresolved), len(seen), ", ".join(map(str, unresolved)))

    return ResolutionResult(
        resolved_ids=frozenset(resolved),
        unresolved_count=len(unresolved),
        unresolved_tokens=unresolved,
        matched_by=matched_by,
        warnings=warnings,
    )
