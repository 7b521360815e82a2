"""Advisory outcomes of best-effort steps.

Fatal problems are raised as exceptions from wtt.exceptions. Steps whose
failure must not abort a command (copying auxiliary files, post-create
commands, registering a repository) return these values instead, and the
command layer decides how to report them.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Advisory:
    """A non-fatal problem met while running an optional step."""

    step: str
    target: str
    message: str

    def __str__(self) -> str:
        return f"{self.step}: {self.target}: {self.message}"


@dataclass
class StepReport:
    """Collected results of a sequence of best-effort steps."""

    completed: List[str] = field(default_factory=list)
    advisories: List[Advisory] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.advisories

    def done(self, target: str) -> None:
        self.completed.append(target)

    def warn(self, step: str, target: str, message: str) -> None:
        self.advisories.append(Advisory(step, target, message))

    def extend(self, other: "StepReport") -> None:
        self.completed.extend(other.completed)
        self.advisories.extend(other.advisories)
