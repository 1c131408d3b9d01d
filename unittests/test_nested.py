from dataclasses import dataclass, field
from typing import Any, Optional

import pytest

from pvconstraints import (
    ConstraintRegistry,
    MaxDepthExceededError,
    ValidationManager,
    ValidationOptions,
    ValidationReport,
    constrained,
    defined,
    kinds,
    nested,
    optional,
    rule,
)

registry = ConstraintRegistry()


@constrained(registry, c=rule(kinds.IS_INT))
@dataclass
class Inner:
    c: Any


@constrained(registry, a=rule(kinds.IS_INT), b=nested())
@dataclass
class Outer:
    a: Any
    b: Any


@constrained(registry, a=rule(kinds.IS_INT), b=defined())
@dataclass
class ImplicitOuter:
    a: Any
    b: Any


@constrained(registry, items=rule(kinds.ARRAY_MAX_SIZE, 3), lookup=optional())
@dataclass
class Container:
    items: list = field(default_factory=list)
    lookup: Optional[dict] = None


@constrained(registry, b=nested(never=True))
@dataclass
class VetoedOuter:
    b: Any


@constrained(registry, has_b=rule(kinds.IS_BOOLEAN), b=nested(when=lambda outer: outer.has_b))
@dataclass
class GatedOuter:
    has_b: Any
    b: Any


@constrained(registry, b=nested(groups={"deep"}))
@dataclass
class GroupedOuter:
    b: Any


@constrained(registry, items=nested())
@dataclass
class NestedItems:
    items: Any


@dataclass
class Plain:
    c: Any = None


@constrained(registry, name=rule(kinds.IS_STRING), parent=optional())
class TreeNode:
    def __init__(self, name: Any, parent: Optional["TreeNode"] = None):
        self.name = name
        self.parent = parent


manager = ValidationManager(registry)


class TestNestedObjects:
    async def test_nested_aggregation(self):
        errors = await manager.validate(Outer(a=5, b=Inner(c="bad")))
        assert len(errors) == 1
        assert errors[0].property == "b"
        assert errors[0].constraints == {}
        assert len(errors[0].children) == 1
        child = errors[0].children[0]
        assert child.property == "c"
        assert child.constraints == {kinds.IS_INT: "c must be an integer number"}
        assert child.value == "bad"
        assert isinstance(child.target, Inner)

    async def test_valid_nested_object(self):
        assert await manager.validate(Outer(a=5, b=Inner(c=1))) == []

    async def test_own_failures_and_children(self):
        errors = await manager.validate(Outer(a="x", b=Inner(c="bad")))
        assert [error.property for error in errors] == ["a", "b"]
        assert errors[1].children[0].property == "c"

    async def test_recursion_into_constrained_types(self):
        errors = await manager.validate(ImplicitOuter(a=5, b=Inner(c="bad")))
        assert [error.property for error in errors] == ["b"]
        assert errors[0].constraints == {}
        assert errors[0].children[0].property == "c"

    async def test_nested_validation_requires_object(self):
        errors = await manager.validate(Outer(a=5, b="no object"))
        assert errors[0].constraints == {
            kinds.NESTED_VALIDATION: "nested property b must be an object or collection"
        }

    async def test_forced_nesting_of_unconstrained_type(self):
        assert await manager.validate(Outer(a=5, b=Plain())) == []
        errors = await manager.validate(Outer(a=5, b=Plain()), ValidationOptions(forbid_unknown_values=True))
        assert errors[0].property == "b"
        assert list(errors[0].children[0].constraints) == [kinds.UNKNOWN_VALUE]

    async def test_unconstrained_types_are_not_visited_implicitly(self):
        errors = await manager.validate(ImplicitOuter(a=5, b=Plain()), ValidationOptions(forbid_unknown_values=True))
        assert errors == []


class TestInactiveNesting:
    async def test_never(self):
        assert await manager.validate(VetoedOuter(b=Inner(c="bad"))) == []
        assert await manager.validate(VetoedOuter(b=[Inner(c="bad")])) == []

    async def test_when(self):
        assert await manager.validate(GatedOuter(has_b=False, b=Inner(c="bad"))) == []
        errors = await manager.validate(GatedOuter(has_b=True, b=Inner(c="bad")))
        assert [error.property for error in errors] == ["b"]
        assert errors[0].children[0].property == "c"

    async def test_groups(self):
        assert await manager.validate(GroupedOuter(b=Inner(c="bad"))) == []
        errors = await manager.validate(GroupedOuter(b=Inner(c="bad")), ValidationOptions(groups={"deep"}))
        assert errors[0].children[0].constraints == {kinds.IS_INT: "c must be an integer number"}


class TestCollections:
    async def test_list_elements(self):
        errors = await manager.validate(Container(items=[Inner(c="x"), Inner(c=1), Inner(c="y")]))
        assert len(errors) == 1
        assert errors[0].property == "items"
        assert [child.property for child in errors[0].children] == ["0", "2"]
        assert errors[0].children[0].value == Inner(c="x")
        assert errors[0].children[0].children[0].property == "c"

    async def test_element_failures_and_own_failures(self):
        errors = await manager.validate(Container(items=[Inner(c=1)] * 3 + [Inner(c="x")]))
        assert list(errors[0].constraints) == [kinds.ARRAY_MAX_SIZE]
        assert [child.property for child in errors[0].children] == ["3"]

    async def test_mapping_values(self):
        errors = await manager.validate(Container(lookup={"first": Inner(c=1), "second": Inner(c="x")}))
        assert errors[0].property == "lookup"
        assert [child.property for child in errors[0].children] == ["second"]

    async def test_nested_lists(self):
        errors = await manager.validate(Container(items=[[Inner(c=1)], [Inner(c=2), Inner(c="x")]]))
        assert errors[0].children[0].property == "1"
        assert errors[0].children[0].children[0].property == "1"
        assert errors[0].children[0].children[0].children[0].property == "c"

    async def test_scalar_elements_are_ignored(self):
        assert await manager.validate(Container(items=[1, "two", None])) == []

    async def test_scalar_elements_of_nested_collections(self):
        errors = await manager.validate(NestedItems(items=[Inner(c="x"), 3, Inner(c=1), None]))
        assert len(errors) == 1
        assert errors[0].constraints == {}
        assert [child.property for child in errors[0].children] == ["0", "1", "3"]
        assert errors[0].children[0].children[0].property == "c"
        assert errors[0].children[1].constraints == {
            kinds.NESTED_VALIDATION: "nested property 1 must be an object or collection"
        }
        assert errors[0].children[1].value == 3
        assert errors[0].children[2].value is None

    async def test_scalar_elements_of_root_collections_are_ignored(self):
        assert await manager.validate([1, "two", Inner(c=1)]) == []

    async def test_root_collection(self):
        errors = await manager.validate([Inner(c=1), Inner(c="x")])
        assert [error.property for error in errors] == ["1"]
        report = ValidationReport(errors)
        assert list(report.messages) == ["[1].c"]


class TestRecursionBounds:
    async def test_self_reference(self):
        node = TreeNode(name=1)
        node.parent = node
        errors = await manager.validate(node)
        assert [error.property for error in errors] == ["name"]

    async def test_reference_cycle(self):
        first = TreeNode(name="first")
        second = TreeNode(name=2, parent=first)
        first.parent = second
        errors = await manager.validate(first)
        assert [error.property for error in errors] == ["parent"]
        assert errors[0].children[0].property == "name"

    async def test_self_containing_list(self):
        items: list = []
        items.append(items)
        assert await manager.validate(Container(items=items)) == []

    async def test_shared_objects_are_validated_everywhere(self):
        shared = Inner(c="x")
        errors = await manager.validate(Container(items=[shared, shared]))
        assert [child.property for child in errors[0].children] == ["0", "1"]

    async def test_max_depth(self):
        chain = TreeNode(name="a", parent=TreeNode(name="b", parent=TreeNode(name="c")))
        assert await manager.validate(chain, ValidationOptions(max_depth=2)) == []
        with pytest.raises(MaxDepthExceededError) as error_info:
            await manager.validate(chain, ValidationOptions(max_depth=1))
        assert error_info.value.path == "TreeNode.parent.parent"
