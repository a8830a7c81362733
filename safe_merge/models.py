"""Data models for safe merge."""

from dataclasses import dataclass
from enum import Enum


class ActionKind(Enum):
    """Types of planned filesystem changes."""
    CREATE_DIRECTORY = "create_directory"
    COPY_FILE = "copy_file"


@dataclass(frozen=True)
class Action:
    """A single planned change to the destination tree."""
    kind: ActionKind
    source_path: str
    destination_path: str
    permissions: int = 0

    def describe(self) -> str:
        """Human-readable line printed by the executor."""
        if self.kind is ActionKind.CREATE_DIRECTORY:
            return f"Make dir:  {self.destination_path}, {self.permissions:04o}"
        return f"Copy file: {self.source_path} -> {self.destination_path}"


# Ordered pre-order sequence of actions, parents before their children.
Plan = tuple[Action, ...]


@dataclass(frozen=True)
class PlanSummary:
    """Counts of actions in a plan."""
    directories: int
    files: int

    @property
    def total(self) -> int:
        return self.directories + self.files


def summarize_plan(plan: Plan) -> PlanSummary:
    """Count the directories and files a plan would create."""
    directories = sum(1 for a in plan if a.kind is ActionKind.CREATE_DIRECTORY)
    files = sum(1 for a in plan if a.kind is ActionKind.COPY_FILE)
    return PlanSummary(directories=directories, files=files)
