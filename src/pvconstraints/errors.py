"""
Contains the error node of the validation result tree and the exceptions raised by the engine itself.

Invalid data never raises. It is reported as a tree of `ErrorNode`s. The exceptions in this module indicate that the
validation setup is broken (unknown constraint kinds, malformed options, misbehaving predicates).
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from frozendict import frozendict

from .types import MISSING


# pylint: disable=too-few-public-methods
@dataclass(frozen=True)
class ErrorNode:
    """
    One node of the validation result. It corresponds to one field of a validated object (or one element of a
    validated collection). `constraints` maps the failed constraint kinds onto their formatted messages in evaluation
    order, `children` contains the failing nodes of a nested object or collection.
    """

    property: str
    constraints: frozendict[str, str] = field(default_factory=frozendict)
    children: tuple["ErrorNode", ...] = ()
    target: Any = MISSING
    value: Any = MISSING

    @property
    def has_target(self) -> bool:
        """True if the owning object is embedded into this node"""
        return self.target is not MISSING

    @property
    def has_value(self) -> bool:
        """True if the offending value is embedded into this node"""
        return self.value is not MISSING

    def __str__(self):
        messages = "; ".join(self.constraints.values())
        if self.children:
            nested = ", ".join(str(child) for child in self.children)
            return f"{self.property}: [{messages}] -> ({nested})" if messages else f"{self.property} -> ({nested})"
        return f"{self.property}: {messages}"


class ConstraintEngineError(Exception):
    """
    Base class of all errors indicating a broken validation setup. These errors are never part of a validation
    result. They are raised out of the validation call.
    """


class ConfigurationError(ConstraintEngineError, ValueError):
    """
    Raised if the options of a validation run or a constraint declaration are malformed.
    """


class UnknownConstraintKindError(ConstraintEngineError, LookupError):
    """
    Raised if a constraint record refers to a kind which is not registered in the predicate catalog.
    """

    def __init__(self, kind: str, owner_type: Optional[type] = None, field_name: Optional[str] = None):
        self.kind = kind
        self.owner_type = owner_type
        self.field_name = field_name
        location = ""
        if owner_type is not None:
            location = f" (declared on {owner_type.__name__}.{field_name})"
        super().__init__(f"Unknown constraint kind '{kind}'{location}")


class PredicateError(ConstraintEngineError):
    """
    Raised if a predicate raised an exception or returned something else than a boolean. The original exception
    (if any) is attached as `__cause__`.
    """

    def __init__(self, kind: str, owner_type: type, field_name: str, reason: str):
        self.kind = kind
        self.owner_type = owner_type
        self.field_name = field_name
        super().__init__(f"Predicate '{kind}' on {owner_type.__name__}.{field_name} {reason}")


class MaxDepthExceededError(ConstraintEngineError):
    """
    Raised if the nesting of the validated object graph exceeds `ValidationOptions.max_depth`.
    """

    def __init__(self, max_depth: int, path: str):
        self.max_depth = max_depth
        self.path = path
        super().__init__(f"{path}: nesting exceeds the maximum depth of {max_depth}")


class ObjectValidationError(ValueError):
    """
    Raised by `ValidationManager.validate_or_raise` if the validated instance has constraint violations. Unlike the
    `ConstraintEngineError`s this error is about the data, the violations are available as `errors`.
    """

    def __init__(self, instance: Any, errors: list[ErrorNode]):
        self.instance = instance
        self.errors = errors
        summary = ", ".join(str(error) for error in errors)
        super().__init__(f"{type(instance).__name__} is invalid: {summary}")
