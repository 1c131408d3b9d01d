import pytest

from pvconstraints import (
    ConfigurationError,
    ConstraintContext,
    PredicateCatalog,
    UnknownConstraintKindError,
    kinds,
    predicates,
)
from pvconstraints.messages import format_message


def make_context(value=5, constraints=(10, 20)) -> ConstraintContext:
    return ConstraintContext(
        value=value, property="x", kind=kinds.IS_IN_RANGE, constraints=constraints, target_name="Holder"
    )


class AlwaysValid:
    def validate(self, value, context) -> bool:
        return True


class TestCatalog:
    def test_builtins(self):
        catalog = PredicateCatalog()
        entry = catalog.resolve(kinds.IS_IN_RANGE)
        assert entry.predicate is predicates.is_in_range
        assert entry.invoke(15, make_context(15)) is True
        assert entry.invoke(5, make_context(5)) is False
        assert kinds.MATCHES in catalog

    def test_without_builtins(self):
        catalog = PredicateCatalog(include_builtins=False)
        assert len(catalog) == 0
        with pytest.raises(UnknownConstraintKindError):
            catalog.resolve(kinds.IS_STRING)

    def test_duplicate_kind(self):
        catalog = PredicateCatalog()
        with pytest.raises(ConfigurationError):
            catalog.register(kinds.IS_STRING, predicates.is_string, "$property must be a string")
        catalog.register(kinds.IS_STRING, predicates.is_alpha, "$property must be text", replace=True)
        assert catalog.resolve(kinds.IS_STRING).predicate is predicates.is_alpha

    @pytest.mark.parametrize("kind", [kinds.WHITELIST_VALIDATION, kinds.UNKNOWN_VALUE, ""])
    def test_reserved_and_empty_kinds(self, kind: str):
        with pytest.raises(ConfigurationError):
            PredicateCatalog().register(kind, predicates.is_string, "message")

    def test_register_validator_class(self):
        catalog = PredicateCatalog()
        catalog.register_validator("always-valid", AlwaysValid)
        entry = catalog.resolve("always-valid")
        assert entry.context_aware
        assert entry.invoke("anything", make_context("anything")) is True
        assert format_message(entry.default_message, make_context()) == "x failed the is-in-range constraint"

    def test_register_invalid_validator(self):
        with pytest.raises(ConfigurationError):
            PredicateCatalog().register_validator("invalid", object())


class TestMessages:
    def test_placeholders(self):
        template = "$target.$property=$value must be between $constraint1 and $constraint2 ($constraints)"
        assert format_message(template, make_context()) == "Holder.x=5 must be between 10 and 20 (10,20)"

    def test_collection_arguments(self):
        context = make_context(value="c", constraints=(["a", "b"],))
        assert format_message("$property must be one of $constraint1", context) == "x must be one of a,b"

    def test_unknown_placeholders_are_kept(self):
        assert format_message("$property $unknown", make_context()) == "x $unknown"

    def test_message_function(self):
        assert format_message(lambda context: f"{context.property}!", make_context()) == "x!"

    def test_length_messages(self):
        message = PredicateCatalog().resolve(kinds.LENGTH).default_message
        too_short = ConstraintContext(value="a", property="x", kind=kinds.LENGTH, constraints=(2, 3), target_name="T")
        too_long = ConstraintContext(value="abcd", property="x", kind=kinds.LENGTH, constraints=(2, 3), target_name="T")
        assert format_message(message, too_short) == "x must be longer than or equal to 2 characters"
        assert format_message(message, too_long) == "x must be shorter than or equal to 3 characters"
