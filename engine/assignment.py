"""Bulk design assignment over a resolved selection."""

import logging
from typing import Iterable, List, Optional

from data.errors import AssignmentError, DataLoadError
from models.outcome import (
    AssignmentOutcome, SelectionWarning,
    SUCCESS, PRECONDITION_FAILURE, ASSIGNMENT_FAILURE, DATA_LOAD_FAILURE,
)

logger = logging.getLogger(__name__)


class SelectionState:
    """The operator's current visual tokens and the ids last resolved from them."""

    def __init__(self):
        self.tokens: List[str] = []
        self.resolved_ids: frozenset = frozenset()

    def add_token(self, token: str):
        if token not in self.tokens:
            self.tokens.append(token)

    def remove_token(self, token: str):
        if token in self.tokens:
            self.tokens.remove(token)

    def toggle_token(self, token: str) -> bool:
        """Add or remove a token; True when it is now selected."""
        if token in self.tokens:
            self.tokens.remove(token)
            return False
        self.tokens.append(token)
        return True

    def set_tokens(self, tokens: Iterable[str]):
        self.tokens = list(dict.fromkeys(tokens))

    def set_resolved(self, ids: Iterable[int]):
        self.resolved_ids = frozenset(ids)

    def clear(self):
        self.tokens = []
        self.resolved_ids = frozenset()

    def __len__(self) -> int:
        return len(self.resolved_ids)


class BulkAssignmentCoordinator:
    """Applies one design to a resolved selection and refreshes the floors it touched."""

    def __init__(self, client, selection: SelectionState, loader):
        self.client = client
        self.selection = selection
        self.loader = loader

    def _touched_floors(self, unit_ids) -> List[int]:
        floor_ids = []
        for unit_id in sorted(unit_ids):
            floor = self.loader.tower.floor_of_unit(unit_id)
            if floor is not None and floor.floor_id not in floor_ids:
                floor_ids.append(floor.floor_id)
        return floor_ids

    async def assign(self, resolved_ids: Optional[Iterable[int]], design_id: Optional[int]) -> AssignmentOutcome:
        ids = frozenset(resolved_ids or ())
        if not ids:
            return AssignmentOutcome(status=PRECONDITION_FAILURE, message="Select at least one unit.")
        if design_id is None:
            return AssignmentOutcome(status=PRECONDITION_FAILURE, message="Choose a design to assign.")

        # Floors are captured before the call; the refresh replaces their unit lists
        floor_ids = self._touched_floors(ids)
        try:
            message = await self.client.assign_design(ids, design_id)
        except AssignmentError as e:
            logger.error("Assigning design %s to %d units failed: %s", design_id, len(ids), e)
            return AssignmentOutcome(status=ASSIGNMENT_FAILURE, message=str(e), unit_ids=ids)

        self.selection.clear()

        refreshed, failed, warnings = [], [], []
        for floor_id in floor_ids:
            try:
                await self.loader.refresh_floor(floor_id)
                refreshed.append(floor_id)
            except DataLoadError as e:
                failed.append(floor_id)
                warnings.append(SelectionWarning(
                    kind=DATA_LOAD_FAILURE,
                    message=f"Floor {floor_id} could not be refreshed after assignment: {e}",
                    subject=str(floor_id),
                ))
                logger.warning("Refresh of floor %s after assignment failed: %s", floor_id, e)

        return AssignmentOutcome(
            status=SUCCESS,
            message=message or f"Design assigned to {len(ids)} units.",
            unit_ids=ids,
            refreshed_floor_ids=refreshed,
            failed_floor_ids=failed,
            warnings=warnings,
        )
