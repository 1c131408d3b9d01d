"""
Contains the constraint records and the registry storing them per (owner type, field name).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .errors import ConfigurationError
from .types import Message, WhenFunction

_logger = logging.getLogger(__name__)


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class ConstraintRecord:
    """
    One declared rule on one field. The record is created once at declaration time and lives as long as the registry
    holding it.
    """

    owner_type: type
    field_name: str
    kind: str
    constraint_arguments: tuple[Any, ...] = ()
    message: Optional[Message] = None
    groups: frozenset[str] = field(default_factory=frozenset)
    always: bool = False
    never: bool = False
    each_element: bool = False
    when: Optional[WhenFunction] = None

    def __post_init__(self):
        if not isinstance(self.owner_type, type):
            raise ConfigurationError(f"owner_type must be a class, got {self.owner_type!r}")
        if not isinstance(self.field_name, str) or not self.field_name:
            raise ConfigurationError(f"field_name must be a non-empty string, got {self.field_name!r}")
        if not isinstance(self.kind, str) or not self.kind:
            raise ConfigurationError(f"kind must be a non-empty string, got {self.kind!r}")
        if self.message is not None and not isinstance(self.message, str) and not callable(self.message):
            raise ConfigurationError(f"{self.location}: message must be a string or a callable")
        if self.when is not None and not callable(self.when):
            raise ConfigurationError(f"{self.location}: when must be callable")
        if isinstance(self.groups, str):
            raise ConfigurationError(f"{self.location}: groups must be a collection of strings, not a string")
        # the dataclass is frozen, normalisation has to bypass __setattr__
        object.__setattr__(self, "groups", frozenset(self.groups))
        object.__setattr__(self, "constraint_arguments", tuple(self.constraint_arguments))

    @property
    def location(self) -> str:
        """Human readable `Owner.field` notation of the constrained field"""
        return f"{self.owner_type.__name__}.{self.field_name}"


class ConstraintRegistry:
    """
    Append-only store of `ConstraintRecord`s keyed by owner type and field name. All registrations have to happen
    before the first validation run which reads them; lookups never mutate the registry and may be shared between
    concurrent validation runs.
    """

    def __init__(self):
        self._records: dict[type, dict[str, list[ConstraintRecord]]] = {}

    def register(self, owner_type: type, field_name: str, record: ConstraintRecord) -> None:
        """
        Appends the record to the constraints of `owner_type.field_name`. The order of registration is the
        declaration order used for evaluation and reporting.
        """
        if record.owner_type is not owner_type or record.field_name != field_name:
            raise ConfigurationError(
                f"Record for {record.location} can't be registered as {owner_type.__name__}.{field_name}"
            )
        self._records.setdefault(owner_type, {}).setdefault(field_name, []).append(record)
        _logger.debug("Registered constraint '%s' on %s", record.kind, record.location)

    def _hierarchy(self, owner_type: type) -> Iterator[type]:
        """Yields the registered classes of the MRO of `owner_type`, most basic class first"""
        for klass in reversed(owner_type.__mro__):
            if klass in self._records:
                yield klass

    def get_constraints(self, owner_type: type) -> tuple[ConstraintRecord, ...]:
        """
        Returns all records applying to instances of `owner_type` (including those declared on base classes).
        Records are grouped by field, fields appear in declaration order with inherited fields first.
        A type which was never registered has no constraints.
        """
        per_field: dict[str, list[ConstraintRecord]] = {}
        for klass in self._hierarchy(owner_type):
            for field_name, records in self._records[klass].items():
                per_field.setdefault(field_name, []).extend(records)
        return tuple(record for records in per_field.values() for record in records)

    def get_field_names(self, owner_type: type) -> tuple[str, ...]:
        """Returns the names of all constrained fields of `owner_type` in declaration order"""
        field_names: dict[str, None] = {}
        for klass in self._hierarchy(owner_type):
            field_names.update(dict.fromkeys(self._records[klass]))
        return tuple(field_names)

    def is_registered(self, owner_type: type) -> bool:
        """True if `owner_type` or one of its base classes carries at least one constraint"""
        return any(True for _ in self._hierarchy(owner_type))

    def __iter__(self) -> Iterator[ConstraintRecord]:
        for fields in self._records.values():
            for records in fields.values():
                yield from records

    def __len__(self):
        return sum(len(records) for fields in self._records.values() for records in fields.values())


default_registry = ConstraintRegistry()
