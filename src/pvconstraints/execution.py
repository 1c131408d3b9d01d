"""
Contains the ValidationManager, the entry point to validate objects against their declared constraints.
"""
import asyncio
import logging
from typing import Any, Iterable, Optional

from .catalog import PredicateCatalog, default_catalog
from .errors import ConfigurationError, ErrorNode, ObjectValidationError
from .options import DEFAULT_OPTIONS, ValidationOptions
from .orchestrator import RecursionOrchestrator
from .registry import ConstraintRecord, ConstraintRegistry, default_registry
from .types import CustomValidator, Message, PredicateFunction

_logger = logging.getLogger(__name__)


class ValidationManager:
    """
    This class combines a constraint registry and a predicate catalog. Register your constraints and custom
    validators first, then validate as many instances as you like - also concurrently, a validation run doesn't
    modify the manager.
    ```
    manager = ValidationManager()
    manager.register(Customer, "age", ConstraintRecord(Customer, "age", kinds.IS_IN_RANGE, (0, 150)))
    errors = await manager.validate(customer)
    ```
    """

    def __init__(self, registry: Optional[ConstraintRegistry] = None, catalog: Optional[PredicateCatalog] = None):
        self.registry: ConstraintRegistry = registry if registry is not None else ConstraintRegistry()
        self.catalog: PredicateCatalog = catalog if catalog is not None else PredicateCatalog()
        # fail fast on a broken setup if the registry was populated beforehand
        self.catalog.check(self.registry)

    def register(self, owner_type: type, field_name: str, record: ConstraintRecord) -> None:
        """Appends a constraint record to the registry"""
        self.registry.register(owner_type, field_name, record)

    def register_predicate(self, kind: str, predicate: PredicateFunction, default_message: Message):
        """Registers a plain predicate `(value, *constraint_arguments) -> bool | Awaitable[bool]` under `kind`"""
        self.catalog.register(kind, predicate, default_message)

    def register_validator(
        self,
        kind: str,
        validator: CustomValidator | type[CustomValidator],
        default_message: Optional[Message] = None,
    ):
        """Registers a custom validator (instance or class) under `kind`"""
        self.catalog.register_validator(kind, validator, default_message)

    def check(self, records: Optional[Iterable[ConstraintRecord]] = None) -> None:
        """
        Raises an `UnknownConstraintKindError` if any of the `records` (default: all registered records) refers to a
        constraint kind which is not in the catalog.
        """
        self.catalog.check(self.registry if records is None else records)

    async def validate(self, instance: Any, options: Optional[ValidationOptions] = None) -> list[ErrorNode]:
        """
        Validates `instance` and returns the error tree. The list is empty if the instance is valid.
        Invalid data never raises; a broken setup (unknown kinds, failing predicates, ...) raises a
        `ConstraintEngineError`.
        """
        options = options if options is not None else DEFAULT_OPTIONS
        if not isinstance(options, ValidationOptions):
            raise ConfigurationError(f"options must be ValidationOptions, got {type(options).__name__}")
        _logger.debug("Validating %s", type(instance).__name__)
        errors = await RecursionOrchestrator(self.registry, self.catalog, options).validate(instance)
        _logger.debug("Validated %s: %i failing field(s)", type(instance).__name__, len(errors))
        return errors

    async def validate_or_raise(self, instance: Any, options: Optional[ValidationOptions] = None) -> None:
        """Like `validate` but raises an `ObjectValidationError` if the instance is invalid"""
        errors = await self.validate(instance, options)
        if errors:
            raise ObjectValidationError(instance, errors)

    def validate_sync(self, instance: Any, options: Optional[ValidationOptions] = None) -> list[ErrorNode]:
        """
        Blocking variant of `validate` for code which doesn't run an event loop. It must not be called from within a
        running event loop.
        """
        return asyncio.run(self.validate(instance, options))


default_manager = ValidationManager(default_registry, default_catalog)


async def validate(instance: Any, options: Optional[ValidationOptions] = None) -> list[ErrorNode]:
    """Validates `instance` against the constraints of the default registry"""
    return await default_manager.validate(instance, options)
