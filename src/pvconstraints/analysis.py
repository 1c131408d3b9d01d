"""
Contains functionality to analyze the result of a validation run
"""
import itertools
from typing import Iterator, Optional, Sequence

from .errors import ErrorNode


def _join(base_path: str, node_property: str) -> str:
    if not node_property:
        return base_path
    if node_property.isdigit():
        return f"{base_path}[{node_property}]"
    return f"{base_path}.{node_property}" if base_path else node_property


def _walk(nodes: Sequence[ErrorNode], base_path: str) -> Iterator[tuple[str, ErrorNode]]:
    for node in nodes:
        path = _join(base_path, node.property)
        yield path, node
        yield from _walk(node.children, path)


def _extract_kind(kind_and_path: tuple[str, str]) -> str:
    return kind_and_path[0]


class ValidationReport:
    """
    Wraps the error tree returned by `ValidationManager.validate`. This class provides properties for further
    analysis of the errors. Note that the values are calculated only if you use them - this saves some CPU time if
    you are only interested in e.g. whether the instance is valid.
    """

    def __init__(self, errors: Sequence[ErrorNode]):
        self._errors = errors

        self._nodes: Optional[list[tuple[str, ErrorNode]]] = None
        self._failures: Optional[list[tuple[str, str]]] = None
        self._num_errors_per_kind: Optional[dict[str, int]] = None

    @property
    def errors(self) -> Sequence[ErrorNode]:
        """The error tree as returned by the validation"""
        return self._errors

    @property
    def is_valid(self) -> bool:
        """True if the validated instance has no violations at all"""
        return len(self._errors) == 0

    @property
    def nodes(self) -> list[tuple[str, ErrorNode]]:
        """
        All nodes of the error tree (depth first, in result order) together with their path,
        e.g. `address.street` or `items[2].name`.
        """
        if self._nodes is None:
            self._nodes = list(_walk(self._errors, ""))
        return self._nodes

    @property
    def failures(self) -> list[tuple[str, str]]:
        """
        A `(kind, path)` pair for every failed constraint in the tree.
        It is sorted by the constraint kind to enable grouping by it using itertools.
        """
        if self._failures is None:
            self._failures = sorted(
                ((kind, path) for path, node in self.nodes for kind in node.constraints),
                key=_extract_kind,
            )
        return self._failures

    @property
    def messages(self) -> dict[str, list[str]]:
        """Maps the paths of the failing fields onto their messages (fields with failing children only are omitted)"""
        return {path: list(node.constraints.values()) for path, node in self.nodes if node.constraints}

    @property
    def num_errors_total(self) -> int:
        """Number of failed constraints in total"""
        return len(self.failures)

    @property
    def num_errors_per_kind(self) -> dict[str, int]:
        """This is a dictionary which maps the constraint kind to the number of times it failed"""
        if self._num_errors_per_kind is None:
            self._num_errors_per_kind = {
                kind: sum(1 for _ in values_iter)
                for kind, values_iter in itertools.groupby(self.failures, key=_extract_kind)
            }
        return self._num_errors_per_kind
