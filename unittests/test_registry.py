from dataclasses import dataclass

import pytest

from pvconstraints import ConfigurationError, ConstraintRecord, ConstraintRegistry, declare_field, kinds, rule


@dataclass
class Base:
    identifier: str = ""


@dataclass
class Derived(Base):
    name: str = ""


class Unrelated:
    pass


@pytest.fixture
def registry() -> ConstraintRegistry:
    result = ConstraintRegistry()
    declare_field(Derived, "name", rule(kinds.IS_STRING), rule(kinds.MIN_LENGTH, 1), registry=result)
    declare_field(Base, "identifier", rule(kinds.IS_UUID), registry=result)
    declare_field(Derived, "identifier", rule(kinds.IS_NOT_EMPTY), registry=result)
    return result


class TestRegistry:
    def test_unregistered_type_has_no_constraints(self, registry: ConstraintRegistry):
        assert registry.get_constraints(Unrelated) == ()
        assert registry.get_field_names(Unrelated) == ()
        assert not registry.is_registered(Unrelated)

    def test_base_class_constraints(self, registry: ConstraintRegistry):
        assert [record.kind for record in registry.get_constraints(Base)] == [kinds.IS_UUID]
        assert registry.is_registered(Base)

    def test_inherited_constraints_come_first(self, registry: ConstraintRegistry):
        records = registry.get_constraints(Derived)
        assert [(record.field_name, record.kind) for record in records] == [
            ("identifier", kinds.IS_UUID),
            ("identifier", kinds.IS_NOT_EMPTY),
            ("name", kinds.IS_STRING),
            ("name", kinds.MIN_LENGTH),
        ]
        assert registry.get_field_names(Derived) == ("identifier", "name")

    def test_iteration(self, registry: ConstraintRegistry):
        assert len(registry) == 4
        assert len(list(registry)) == 4

    def test_register_mismatching_record(self, registry: ConstraintRegistry):
        record = ConstraintRecord(owner_type=Base, field_name="identifier", kind=kinds.IS_STRING)
        with pytest.raises(ConfigurationError):
            registry.register(Derived, "identifier", record)


class TestConstraintRecord:
    def test_normalisation(self):
        record = ConstraintRecord(Base, "identifier", kinds.IS_IN, [["a", "b"]], groups=["create"])
        assert record.constraint_arguments == (["a", "b"],)
        assert record.groups == frozenset({"create"})
        assert record.location == "Base.identifier"

    @pytest.mark.parametrize(
        "kwargs",
        [
            pytest.param({"owner_type": "Base"}, id="owner type is no class"),
            pytest.param({"field_name": ""}, id="empty field name"),
            pytest.param({"kind": ""}, id="empty kind"),
            pytest.param({"groups": "create"}, id="groups as string"),
            pytest.param({"message": 42}, id="message neither string nor callable"),
            pytest.param({"when": True}, id="when is not callable"),
        ],
    )
    def test_malformed_records(self, kwargs):
        arguments = {"owner_type": Base, "field_name": "identifier", "kind": kinds.IS_STRING} | kwargs
        with pytest.raises(ConfigurationError):
            ConstraintRecord(**arguments)

    def test_declare_field_rejects_non_rules(self):
        with pytest.raises(ConfigurationError):
            declare_field(Base, "identifier", kinds.IS_STRING, registry=ConstraintRegistry())  # type:ignore[arg-type]
