"""Generates human-readable explanations for selection results."""

from collections import Counter
from typing import List, Optional

from models.outcome import AssignmentOutcome, CompatibilityResult, ResolutionResult

STRATEGY_LABELS = {
    "direct_hit": "exact key match",
    "structured_pattern": "block/floor/unit pattern",
    "literal_id": "unit id",
    "trailing_numeric_run": "trailing number",
    "segment_scan": "numeric segment",
}


def explain_resolution(result: ResolutionResult, total_tokens: int) -> List[str]:
    """Step-by-step summary of how clicked shapes turned into units."""
    steps = []

    resolved_tokens = total_tokens - result.unresolved_count
    steps.append(
        f"Step 1 - Tokens: {total_tokens} clicked, {resolved_tokens} matched, "
        f"{result.unresolved_count} unmatched"
    )

    if result.matched_by:
        counts = Counter(result.matched_by.values())
        parts = ", ".join(
            f"{STRATEGY_LABELS.get(name, name)} x{count}" for name, count in counts.most_common()
        )
        steps.append(f"Step 2 - Matched by: {parts}")

    duplicates = resolved_tokens - len(result.resolved_ids)
    if duplicates > 0:
        steps.append(f"Note: {duplicates} tokens pointed at units already selected")

    steps.append(f"Step 3 - Selection: {len(result.resolved_ids)} units")

    if result.unresolved_tokens:
        steps.append(f"Unmatched: {', '.join(result.unresolved_tokens)}")

    return steps


def explain_range(
    block_labels: List[str],
    floor_from: Optional[str],
    floor_to: Optional[str],
    unit_from: Optional[str],
    unit_to: Optional[str],
    compatibility: CompatibilityResult,
    selected_count: int,
) -> List[str]:
    """Summarize a floor/unit range query."""
    steps = [f"Step 1 - Blocks: {', '.join(block_labels) or 'none'}"]

    if compatibility.compatible:
        steps.append("Step 2 - Floors: all selected blocks share the same floors")
    else:
        steps.append("Step 2 - Floors: blocks differ; the range is applied to each block separately")

    if any(v in (None, "") for v in (floor_from, floor_to, unit_from, unit_to)):
        steps.append("Step 3 - Range incomplete: choose both floor and unit bounds")
        return steps

    steps.append(
        f"Step 3 - Range: floors {floor_from}..{floor_to}, units {unit_from}..{unit_to} "
        f"=> {selected_count} units"
    )
    return steps


def explain_assignment(outcome: AssignmentOutcome) -> List[str]:
    steps = [outcome.message] if outcome.message else []
    if outcome.ok:
        steps.append(f"Refreshed {len(outcome.refreshed_floor_ids)} floors")
        if outcome.failed_floor_ids:
            steps.append(f"Could not refresh floors: {', '.join(map(str, outcome.failed_floor_ids))}")
    return steps
