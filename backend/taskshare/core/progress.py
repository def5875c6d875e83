"""Progress Strategies — pluggable computation of a task list's progress value.

Invariants:
    - Every strategy returns a float in [0.0, 1.0]
    - constant_progress is the default and always returns 0.0
    - completed_ratio returns 0.0 for a list without to-dos (no division by zero)

Design Decisions:
    - Strategies are plain functions over the list's to-dos, selected by name
      from PROGRESS_STRATEGIES (PROGRESS_STRATEGY setting)
"""

from typing import Callable, Sequence

from taskshare.core.domain_types import Progress, ProgressStrategyName
from taskshare.core.records import ToDoRecord

ProgressStrategy = Callable[[Sequence[ToDoRecord]], Progress]


def constant_progress(todos: Sequence[ToDoRecord]) -> Progress:
    return Progress(0.0)


def completed_ratio(todos: Sequence[ToDoRecord]) -> Progress:
    if not todos:
        return Progress(0.0)
    done = sum(1 for todo in todos if todo.is_completed)
    return Progress(done / len(todos))


PROGRESS_STRATEGIES: dict[ProgressStrategyName, ProgressStrategy] = {
    ProgressStrategyName.CONSTANT: constant_progress,
    ProgressStrategyName.COMPLETED_RATIO: completed_ratio,
}


def get_progress_strategy(name: ProgressStrategyName | str) -> ProgressStrategy:
    return PROGRESS_STRATEGIES[ProgressStrategyName(name)]
