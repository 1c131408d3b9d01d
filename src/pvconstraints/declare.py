"""
Contains helpers to declare constraints on classes. They only create `ConstraintRecord`s and append them to a
registry, the engine doesn't depend on them:
```
@constrained(
    name=[rule(kinds.IS_STRING), rule(kinds.LENGTH, 1, 50)],
    age=rule(kinds.IS_IN_RANGE, 0, 150, groups={"create"}),
    tags=rule(kinds.MAX_LENGTH, 10, each=True),
)
@dataclass
class Customer:
    ...
```
"""
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

from . import kinds
from .errors import ConfigurationError
from .registry import ConstraintRecord, ConstraintRegistry, default_registry
from .types import Message, WhenFunction

ClassT = TypeVar("ClassT", bound=type)


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class Rule:
    """A constraint which is not yet bound to a field"""

    kind: str
    arguments: tuple[Any, ...] = ()
    message: Optional[Message] = None
    groups: frozenset[str] = frozenset()
    always: bool = False
    never: bool = False
    each: bool = False
    when: Optional[WhenFunction] = None

    def bind(self, owner_type: type, field_name: str) -> ConstraintRecord:
        """Creates the constraint record of this rule for `owner_type.field_name`"""
        return ConstraintRecord(
            owner_type=owner_type,
            field_name=field_name,
            kind=self.kind,
            constraint_arguments=self.arguments,
            message=self.message,
            groups=self.groups,
            always=self.always,
            never=self.never,
            each_element=self.each,
            when=self.when,
        )


# pylint: disable=too-many-arguments
def rule(
    kind: str,
    *arguments: Any,
    message: Optional[Message] = None,
    groups: Iterable[str] = (),
    always: bool = False,
    never: bool = False,
    each: bool = False,
    when: Optional[WhenFunction] = None,
) -> Rule:
    """Creates a rule of the given kind. The positional `arguments` are passed to the predicate after the value."""
    if isinstance(groups, str):
        raise ConfigurationError("groups must be a collection of group names, not a single string")
    return Rule(
        kind=kind,
        arguments=arguments,
        message=message,
        groups=frozenset(groups),
        always=always,
        never=never,
        each=each,
        when=when,
    )


def defined(**metadata: Any) -> Rule:
    """The value must not be `None` or missing - even if missing values are skipped"""
    return rule(kinds.IS_DEFINED, **metadata)


def optional(**metadata: Any) -> Rule:
    """All constraints of the field are ignored if the value is `None` or missing"""
    return rule(kinds.IS_OPTIONAL, **metadata)


def nested(**metadata: Any) -> Rule:
    """The value must be an object or collection and is validated recursively, even if its type has no constraints"""
    return rule(kinds.NESTED_VALIDATION, **metadata)


def declare_field(
    owner_type: type, field_name: str, *rules: Rule, registry: Optional[ConstraintRegistry] = None
) -> list[ConstraintRecord]:
    """Registers the `rules` on `owner_type.field_name` in declaration order and returns the created records"""
    target_registry = registry if registry is not None else default_registry
    records = []
    for field_rule in rules:
        if not isinstance(field_rule, Rule):
            raise ConfigurationError(f"{owner_type.__name__}.{field_name}: {field_rule!r} is not a Rule")
        record = field_rule.bind(owner_type, field_name)
        target_registry.register(owner_type, field_name, record)
        records.append(record)
    return records


def constrained(
    registry: Optional[ConstraintRegistry] = None, /, **fields: Rule | Iterable[Rule]
) -> Callable[[ClassT], ClassT]:
    """
    Class decorator which registers the given rules per field. The keyword order is the field declaration order.
    """

    def decorator(owner_type: ClassT) -> ClassT:
        for field_name, field_rules in fields.items():
            if isinstance(field_rules, Rule):
                field_rules = [field_rules]
            declare_field(owner_type, field_name, *field_rules, registry=registry)
        return owner_type

    return decorator
