"""
Contains the error aggregator which turns the outcomes of the scheduler and the orchestrator into `ErrorNode`s.
"""
from typing import Any, Mapping, Sequence

from frozendict import frozendict

from . import kinds
from .context import ConstraintContext
from .errors import ErrorNode
from .messages import format_message
from .options import ValidationOptions
from .scheduler import ConstraintFailure, ObjectOutcome
from .types import MISSING

UNKNOWN_VALUE_MESSAGE = "an unknown value was passed to the validate function"


class ErrorAggregator:
    """
    Assembles the error tree of one validation run. Messages are formatted here (and not when the predicate
    failed), so message functions are only called for failures which are actually reported.
    """

    def __init__(self, options: ValidationOptions):
        self.options = options

    def _embed(self, target: Any, value: Any) -> dict[str, Any]:
        embedded = {}
        if self.options.validation_error.target:
            embedded["target"] = target
        if self.options.validation_error.value:
            embedded["value"] = value
        return embedded

    def format_failure(self, owner: Any, failure: ConstraintFailure) -> str:
        """Formats the message of one failed constraint"""
        record = failure.record
        context = ConstraintContext(
            value=failure.value,
            property=record.field_name,
            kind=record.kind,
            constraints=record.constraint_arguments,
            target_name=type(owner).__name__,
            target=owner if self.options.validation_error.target else MISSING,
        )
        message = record.message if record.message is not None else failure.entry.default_message
        return format_message(message, context)

    def constraints(self, owner: Any, failures: Sequence[ConstraintFailure]) -> frozendict[str, str]:
        """
        Maps the failed kinds onto their messages in evaluation order. If a kind failed more than once on the same
        field, the first failure is reported.
        """
        messages: dict[str, str] = {}
        for failure in failures:
            if failure.record.kind not in messages:
                messages[failure.record.kind] = self.format_failure(owner, failure)
        return frozendict(messages)

    def assemble(self, outcome: ObjectOutcome, children: Mapping[str, list[ErrorNode]]) -> list[ErrorNode]:
        """
        Creates one node per field with own failures or failing descendants (in declaration order), followed by the
        whitelist violations. Fields without any failure are omitted.
        """
        owner = outcome.owner
        nodes: list[ErrorNode] = []
        if outcome.unknown_value:
            nodes.append(self.unknown_value_node(owner))
        for field_outcome in outcome.fields:
            field_children = children.get(field_outcome.field_name, [])
            if not field_outcome.failures and not field_children:
                continue
            nodes.append(
                ErrorNode(
                    property=field_outcome.field_name,
                    constraints=self.constraints(owner, field_outcome.failures),
                    children=tuple(field_children),
                    **self._embed(owner, field_outcome.value),
                )
            )
        for field_name in outcome.unknown_fields:
            nodes.append(
                ErrorNode(
                    property=field_name,
                    constraints=frozendict({kinds.WHITELIST_VALIDATION: f"property {field_name} should not exist"}),
                    **self._embed(owner, getattr(owner, field_name)),
                )
            )
        return nodes

    def element_node(self, collection: Any, key: str, element: Any, children: list[ErrorNode]) -> ErrorNode:
        """Creates the node of a failing element of a collection, `key` is the index or mapping key"""
        return ErrorNode(property=key, children=tuple(children), **self._embed(collection, element))

    def invalid_element_node(self, collection: Any, key: str, element: Any) -> ErrorNode:
        """Creates the node of an element of a nested collection which is neither an object nor a collection"""
        return ErrorNode(
            property=key,
            constraints=frozendict({kinds.NESTED_VALIDATION: f"nested property {key} must be an object or collection"}),
            **self._embed(collection, element),
        )

    def unknown_value_node(self, value: Any) -> ErrorNode:
        """Creates the node reported for values of types without any constraint if unknown values are forbidden"""
        return ErrorNode(
            property="",
            constraints=frozendict({kinds.UNKNOWN_VALUE: UNKNOWN_VALUE_MESSAGE}),
            **self._embed(value, value),
        )
