from dataclasses import dataclass, field
from typing import Optional

from frozendict import frozendict

from pvconstraints import (
    ConstraintContext,
    ConstraintRegistry,
    PredicateCatalog,
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


class TestComplexExamples:
    async def test_customer_with_contracts(self):
        registry = ConstraintRegistry()
        catalog = PredicateCatalog()

        class IbanRequiredForSepa:
            """
            If the contract is paid through a SEPA mandate, an IBAN is required and checked on syntax.
            Otherwise the check passes.
            """

            def validate(self, value: Optional[str], context: ConstraintContext) -> bool:
                if not context.target.paying_through_sepa:
                    return True
                return value is not None and value[:2].isalpha() and value[2:].isnumeric()

            def default_message(self, context: ConstraintContext) -> str:
                return f"{context.property} is not a valid IBAN for a SEPA payer"

        catalog.register_validator("iban-for-sepa", IbanRequiredForSepa)

        @constrained(
            registry,
            contract_id=rule(kinds.MATCHES, r"^contract_\d+$"),
            iban=rule("iban-for-sepa"),
        )
        @dataclass(frozen=True)
        class Contract:
            contract_id: str
            paying_through_sepa: bool
            iban: Optional[str] = None

        @constrained(
            registry,
            name=[rule(kinds.IS_STRING), rule(kinds.LENGTH, 1, 100)],
            age=[defined(), rule(kinds.IS_INT), rule(kinds.MIN, 18, groups={"contracting"})],
            email=[optional(), rule(kinds.IS_EMAIL)],
            contracts=[rule(kinds.ARRAY_NOT_EMPTY, groups={"contracting"}), nested()],
        )
        @dataclass(frozen=True)
        class Customer:
            name: str
            age: int
            email: Optional[str] = None
            contracts: tuple[Contract, ...] = field(default_factory=tuple)

        manager = ValidationManager(registry, catalog)
        data = Customer(
            name="John Doe",
            age=17,
            contracts=(
                Contract(contract_id="contract_1", paying_through_sepa=True, iban="DE52940594210000082271"),
                Contract(contract_id="contract_2", paying_through_sepa=True, iban="DEA9370400440532013000"),
                Contract(contract_id="contract_3", paying_through_sepa=False),
            ),
        )

        errors = await manager.validate(data)
        report = ValidationReport(errors)
        assert report.messages == {"contracts[1].iban": ["iban is not a valid IBAN for a SEPA payer"]}

        errors = await manager.validate(data, ValidationOptions(groups={"contracting"}))
        report = ValidationReport(errors)
        assert report.messages == {"age": ["age must not be less than 18"]}
        # contract constraints don't belong to the "contracting" group
        assert report.num_errors_per_kind == {kinds.MIN: 1}

    async def test_configuration_driven_run(self):
        registry = ConstraintRegistry()

        @constrained(
            registry,
            host=[rule(kinds.IS_FQDN, groups={"remote"}), rule(kinds.IS_STRING)],
            port=rule(kinds.IS_IN_RANGE, 1, 65535, always=True),
            labels=rule(kinds.IS_ALPHANUMERIC, each=True, always=True),
        )
        @dataclass
        class ServiceConfig:
            host: str
            port: int
            labels: frozendict = field(default_factory=frozendict)
            comment: Optional[str] = None

        options = ValidationOptions.from_mapping(
            {"groups": ["remote"], "forbid_non_whitelisted": True, "validation_error": {"target": False}}
        )
        errors = await ValidationManager(registry).validate(
            ServiceConfig(host="localhost", port=0, labels=frozendict({"env": "prod-1"}), comment="x"), options
        )
        assert [error.property for error in errors] == ["host", "port", "labels", "comment"]
        assert list(errors[0].constraints) == [kinds.IS_FQDN]
        assert list(errors[3].constraints) == [kinds.WHITELIST_VALIDATION]
        assert not any(error.has_target for error in errors)
