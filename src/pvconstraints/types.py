"""
Contains the types used in the constraint validation framework
"""
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Protocol, TypeAlias, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .context import ConstraintContext


class _MissingType:
    """
    Type of the `MISSING` sentinel. It marks an attribute which is declared (i.e. carries constraints) but is not
    present on the validated instance. `None` on the other hand is a present value.
    """

    _instance: "_MissingType | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING: Any = _MissingType()

OwnerT = TypeVar("OwnerT")
PredicateResult: TypeAlias = bool | Awaitable[bool]
PredicateFunction: TypeAlias = Callable[..., PredicateResult]
MessageFunction: TypeAlias = Callable[["ConstraintContext"], str]
Message: TypeAlias = str | MessageFunction
WhenFunction: TypeAlias = Callable[[Any], bool]


@runtime_checkable
class CustomValidator(Protocol):
    """
    A protocol for custom validators. `validate` may be a plain or a coroutine function.
    `default_message(context) -> str` is optional and therefore not part of the protocol.
    """

    def validate(self, value: Any, context: "ConstraintContext") -> PredicateResult:
        ...
