from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

# Warning kinds surfaced alongside results (never raised)
UNRESOLVED_TOKEN = "UnresolvedTokenWarning"
FLOOR_INCOMPATIBILITY = "FloorIncompatibilityWarning"
INDEX_CONFLICT = "IndexConflictWarning"
DATA_LOAD_FAILURE = "DataLoadFailure"

# Assignment outcome statuses
SUCCESS = "success"
PRECONDITION_FAILURE = "precondition_failure"
ASSIGNMENT_FAILURE = "assignment_failure"


@dataclass
class SelectionWarning:
    kind: str
    message: str
    subject: Optional[str] = None  # token, key, block or floor the warning is about


@dataclass
class IndexConflict:
    key: str
    kept_unit_id: int
    dropped_unit_id: int


@dataclass
class ResolutionResult:
    resolved_ids: FrozenSet[int] = frozenset()
    unresolved_count: int = 0
    unresolved_tokens: List[str] = field(default_factory=list)
    matched_by: Dict[str, str] = field(default_factory=dict)  # token -> strategy name
    warnings: List[SelectionWarning] = field(default_factory=list)


@dataclass
class CompatibilityResult:
    compatible: bool
    floor_codes_by_block: Dict[int, List[str]] = field(default_factory=dict)
    warning: Optional[SelectionWarning] = None


@dataclass
class AssignmentOutcome:
    status: str  # "success", "precondition_failure", "assignment_failure"
    message: str = ""
    unit_ids: FrozenSet[int] = frozenset()
    refreshed_floor_ids: List[int] = field(default_factory=list)
    failed_floor_ids: List[int] = field(default_factory=list)
    warnings: List[SelectionWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS
