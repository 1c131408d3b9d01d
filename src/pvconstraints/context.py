"""
Contains the context object handed to custom validators and message functions.
"""
from dataclasses import dataclass
from typing import Any

from .types import MISSING


@dataclass(frozen=True)
class ConstraintContext:
    """
    Describes one constraint evaluation. Custom validators receive it together with the value to support cross-field
    rules (e.g. "password confirmation equals password"). Message functions receive it when the failure gets
    formatted. For message functions `target` is `MISSING` if the run is configured to not embed targets.
    """

    value: Any
    property: str
    kind: str
    constraints: tuple[Any, ...]
    target_name: str
    target: Any = MISSING

    def constraint(self, index: int, default: Any = None) -> Any:
        """Returns the constraint argument at `index` or `default` if there are fewer arguments."""
        if index < len(self.constraints):
            return self.constraints[index]
        return default
