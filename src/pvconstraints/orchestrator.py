"""
Contains the recursion orchestrator which walks the object graph of a validated instance.
"""
import logging
from enum import Enum
from typing import Any

from .aggregation import ErrorAggregator
from .catalog import PredicateCatalog
from .errors import ErrorNode, MaxDepthExceededError
from .options import ValidationOptions
from .registry import ConstraintRegistry
from .scheduler import ExecutionScheduler, FieldOutcome
from .utils.query_object import is_collection, is_object_value, iter_elements
from .utils.tasks import gather_or_cancel

_logger = logging.getLogger(__name__)


class VisitState(str, Enum):
    """States of the visit of one object"""

    PENDING = "pending"
    VALIDATING_SELF = "validating-self"
    VALIDATING_CHILDREN = "validating-children"
    DONE = "done"


_NEXT_STATE: dict[VisitState, VisitState] = {
    VisitState.PENDING: VisitState.VALIDATING_SELF,
    VisitState.VALIDATING_SELF: VisitState.VALIDATING_CHILDREN,
    VisitState.VALIDATING_CHILDREN: VisitState.DONE,
}


class ObjectVisit:
    """
    Tracks the visit of one object. The own fields of an object are always validated completely before any nested
    value of it is visited.
    """

    def __init__(self, owner: Any, path: str, depth: int):
        self.owner = owner
        self.path = path
        self.depth = depth
        self.state = VisitState.PENDING

    def advance(self, state: VisitState):
        """Moves to the next state; states can't be skipped or repeated"""
        if _NEXT_STATE.get(self.state) is not state:
            raise RuntimeError(f"{self.path}: invalid transition from {self.state.value} to {state.value}")
        _logger.debug("%s: %s -> %s", self.path, self.state.value, state.value)
        self.state = state


class RecursionOrchestrator:
    """
    Drives the `ExecutionScheduler` over the object graph of one validation run and hands the outcomes to the
    `ErrorAggregator`. Sibling fields and sibling collection elements are visited concurrently, the result is ordered
    by declaration and element order.

    Reference cycles are cut: an object (or collection) which is already being visited on the current path is not
    visited again.
    """

    def __init__(self, registry: ConstraintRegistry, catalog: PredicateCatalog, options: ValidationOptions):
        self.registry = registry
        self.options = options
        self.scheduler = ExecutionScheduler(registry, catalog, options)
        self.aggregator = ErrorAggregator(options)

    async def validate(self, instance: Any) -> list[ErrorNode]:
        """Validates `instance` and everything reachable from it"""
        if not is_object_value(instance) and not is_collection(instance):
            if self.options.forbid_unknown_values:
                return [self.aggregator.unknown_value_node(instance)]
            return []
        return await self._validate_value(instance, type(instance).__name__, 0, frozenset(), forced=True)

    async def _visit(self, owner: Any, path: str, depth: int, ancestors: frozenset[int]) -> list[ErrorNode]:
        visit = ObjectVisit(owner, path, depth)
        visit.advance(VisitState.VALIDATING_SELF)
        outcome = await self.scheduler.run(owner)

        visit.advance(VisitState.VALIDATING_CHILDREN)
        ancestors = ancestors | {id(owner)}
        recursing = [field_outcome for field_outcome in outcome.fields if field_outcome.recurse]
        children = await gather_or_cancel(
            self._descend(field_outcome, path, depth, ancestors) for field_outcome in recursing
        )
        children_per_field = {
            field_outcome.field_name: field_children
            for field_outcome, field_children in zip(recursing, children)
            if field_children
        }

        visit.advance(VisitState.DONE)
        return self.aggregator.assemble(outcome, children_per_field)

    async def _descend(self, field_outcome: FieldOutcome, path: str, depth: int, ancestors: frozenset[int]):
        return await self._validate_value(
            field_outcome.value,
            f"{path}.{field_outcome.field_name}",
            depth + 1,
            ancestors,
            forced=field_outcome.nested,
            require_objects=field_outcome.nested,
        )

    async def _validate_value(
        self,
        value: Any,
        path: str,
        depth: int,
        ancestors: frozenset[int],
        forced: bool,
        require_objects: bool = False,
    ) -> list[ErrorNode]:
        """
        Validates a nested value. Objects are visited if their type carries constraints (or if the nesting is
        forced by a "nested-validation" constraint), collections are expanded element by element.
        With `require_objects` every element of a collection has to be an object or a collection itself.
        """
        if id(value) in ancestors:
            _logger.debug("%s: reference cycle, skipping", path)
            return []
        if is_collection(value):
            elements = list(iter_elements(value))
            element_ancestors = ancestors | {id(value)}
            results = await gather_or_cancel(
                self._validate_value(element, f"{path}[{key}]", depth, element_ancestors, forced, require_objects)
                for key, element in elements
            )
            nodes: list[ErrorNode] = []
            for (key, element), element_errors in zip(elements, results):
                if require_objects and not is_object_value(element) and not is_collection(element):
                    nodes.append(self.aggregator.invalid_element_node(value, key, element))
                elif element_errors:
                    nodes.append(self.aggregator.element_node(value, key, element, element_errors))
            return nodes
        if is_object_value(value) and (forced or self.registry.is_registered(type(value))):
            if self.options.max_depth is not None and depth > self.options.max_depth:
                raise MaxDepthExceededError(self.options.max_depth, path)
            return await self._visit(value, path, depth, ancestors)
        return []
