"""
Contains the execution scheduler which evaluates the constraints of the fields of one single object.
Nested objects are not touched here; the scheduler only flags the fields whose values have to be visited by the
`RecursionOrchestrator`.
"""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from . import kinds
from .catalog import CatalogEntry, PredicateCatalog
from .conditions import is_active
from .context import ConstraintContext
from .errors import ConstraintEngineError, PredicateError, UnknownConstraintKindError
from .options import ValidationOptions
from .registry import ConstraintRecord, ConstraintRegistry
from .types import MISSING
from .utils.query_object import field_value, is_collection, is_object_value, iter_elements, present_fields
from .utils.tasks import gather_or_cancel

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintFailure:
    """A failed constraint of a field. `value` is the field value (the whole collection for `each_element`)."""

    record: ConstraintRecord
    entry: CatalogEntry
    value: Any


@dataclass
class FieldOutcome:
    """The result of the evaluation of all active constraints of one field"""

    field_name: str
    value: Any
    failures: list[ConstraintFailure] = field(default_factory=list)
    recurse: bool = False
    nested: bool = False


@dataclass
class ObjectOutcome:
    """
    The result of the evaluation of the own fields of one object. `fields` is in declaration order,
    `unknown_fields` lists present fields without any constraint (only filled in whitelist mode).
    """

    owner: Any
    fields: list[FieldOutcome] = field(default_factory=list)
    unknown_fields: list[str] = field(default_factory=list)
    unknown_value: bool = False


class ExecutionScheduler:
    """
    Evaluates the constraints declared on the fields of an object. The fields of one object are evaluated
    concurrently, the constraints of one field are started together and awaited together. The outcome is always in
    declaration order, independent of the completion order of asynchronous predicates.
    """

    def __init__(self, registry: ConstraintRegistry, catalog: PredicateCatalog, options: ValidationOptions):
        self.registry = registry
        self.catalog = catalog
        self.options = options

    async def run(self, owner: Any) -> ObjectOutcome:
        """Evaluates all fields of `owner`"""
        owner_type = type(owner)
        records = self.registry.get_constraints(owner_type)
        outcome = ObjectOutcome(owner=owner)
        if not records and self.options.forbid_unknown_values:
            outcome.unknown_value = True
            return outcome
        # unknown kinds are a broken setup: fail before any predicate ran
        entries = {record.kind: self._resolve(record) for record in records}
        records_per_field: dict[str, list[ConstraintRecord]] = {}
        for record in records:
            records_per_field.setdefault(record.field_name, []).append(record)

        outcome.fields = await gather_or_cancel(
            self._run_field(owner, field_name, field_records, entries)
            for field_name, field_records in records_per_field.items()
        )
        if self.options.whitelist_check:
            outcome.unknown_fields = [name for name in present_fields(owner) if name not in records_per_field]
        return outcome

    def _resolve(self, record: ConstraintRecord) -> CatalogEntry:
        try:
            return self.catalog.resolve(record.kind)
        except UnknownConstraintKindError as error:
            raise UnknownConstraintKindError(record.kind, record.owner_type, record.field_name) from error

    def _applicable(self, owner: Any, value: Any, records: Sequence[ConstraintRecord]) -> list[ConstraintRecord]:
        """Applies the conditions, the optional marker and the missing value policy to the records of one field"""
        active = [record for record in records if is_active(record, self.options.groups, owner)]
        if (value is None or value is MISSING) and any(record.kind == kinds.IS_OPTIONAL for record in active):
            return []
        if self.options.skips(value, MISSING):
            # "is defined" checks have to fire especially if the value is missing
            active = [record for record in active if record.kind == kinds.IS_DEFINED]
        return active

    async def _run_field(
        self,
        owner: Any,
        field_name: str,
        records: Sequence[ConstraintRecord],
        entries: dict[str, CatalogEntry],
    ) -> FieldOutcome:
        value = field_value(owner, field_name)
        field_outcome = FieldOutcome(field_name=field_name, value=value)
        active = self._applicable(owner, value, records)
        # fields without any active constraint are not descended into
        field_outcome.recurse = bool(active) and (is_object_value(value) or is_collection(value))
        field_outcome.nested = any(record.kind == kinds.NESTED_VALIDATION for record in active)
        if not active:
            _logger.debug("No active constraints on %s.%s", type(owner).__name__, field_name)
            return field_outcome
        if self.options.stop_at_first_error:
            for record in active:
                if not await self._evaluate(owner, record, entries[record.kind], value):
                    field_outcome.failures.append(ConstraintFailure(record, entries[record.kind], value))
                    break
        else:
            results = await gather_or_cancel(
                self._evaluate(owner, record, entries[record.kind], value) for record in active
            )
            field_outcome.failures = [
                ConstraintFailure(record, entries[record.kind], value)
                for record, passed in zip(active, results)
                if not passed
            ]
        return field_outcome

    async def _evaluate(self, owner: Any, record: ConstraintRecord, entry: CatalogEntry, value: Any) -> bool:
        """Evaluates one record; with `each_element` every element of a collection value has to pass"""
        if record.each_element and is_collection(value):
            results = await gather_or_cancel(
                self._call(owner, record, entry, element) for _, element in iter_elements(value)
            )
            return all(results)
        return await self._call(owner, record, entry, value)

    async def _call(self, owner: Any, record: ConstraintRecord, entry: CatalogEntry, value: Any) -> bool:
        context = ConstraintContext(
            value=value,
            property=record.field_name,
            kind=record.kind,
            constraints=record.constraint_arguments,
            target_name=type(owner).__name__,
            target=owner,
        )
        try:
            result = entry.invoke(value, context)
            if inspect.isawaitable(result):
                result = await result
        except ConstraintEngineError:
            raise
        except Exception as error:  # pylint: disable=broad-except
            _logger.warning("Constraint '%s' on %s raised %r", record.kind, record.location, error)
            raise PredicateError(record.kind, type(owner), record.field_name, f"raised {error!r}") from error
        if not isinstance(result, bool):
            raise PredicateError(
                record.kind, type(owner), record.field_name, f"returned {result!r} instead of a boolean"
            )
        return result
