from models.unit import Unit
from models.building import Tower, Block, Floor
from models.design import Design
from models.outcome import (
    SelectionWarning, IndexConflict, ResolutionResult, CompatibilityResult, AssignmentOutcome,
)
