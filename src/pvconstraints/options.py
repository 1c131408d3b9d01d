"""
Contains the options of a validation run.
"""
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from typeguard import TypeCheckError, check_type

from .errors import ConfigurationError


@dataclass(frozen=True)
class ValidationErrorOptions:
    """Decides which parts of the validated data are embedded into the reported `ErrorNode`s"""

    target: bool = True
    value: bool = True

    def __post_init__(self):
        if not isinstance(self.target, bool) or not isinstance(self.value, bool):
            raise ConfigurationError("validation_error.target and validation_error.value must be booleans")


# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class ValidationOptions:
    """
    The immutable configuration of one validation run. There is no global state, every behaviour which is not
    the default has to be configured here.

    Precedence of the skip flags: `skip_missing_properties` skips both `None` and missing values,
    `skip_null_properties` only `None` and `skip_undefined_properties` only missing values. The flags are combined,
    i.e. a value is skipped if any applicable flag is set.
    """

    groups: frozenset[str] = field(default_factory=frozenset)
    skip_missing_properties: bool = False
    skip_null_properties: bool = False
    skip_undefined_properties: bool = False
    whitelist: bool = False
    forbid_non_whitelisted: bool = False
    forbid_unknown_values: bool = False
    stop_at_first_error: bool = False
    validation_error: ValidationErrorOptions = field(default_factory=ValidationErrorOptions)
    max_depth: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.groups, str):
            raise ConfigurationError("groups must be a collection of group names, not a single string")
        try:
            groups = frozenset(self.groups)
        except TypeError as error:
            raise ConfigurationError(f"groups must be a collection of group names, got {self.groups!r}") from error
        if not all(isinstance(group, str) for group in groups):
            raise ConfigurationError(f"groups must only contain strings, got {sorted(map(repr, groups))}")
        object.__setattr__(self, "groups", groups)
        for option in dataclasses.fields(self):
            if option.type is bool and not isinstance(getattr(self, option.name), bool):
                raise ConfigurationError(f"{option.name} must be a boolean, got {getattr(self, option.name)!r}")
        if not isinstance(self.validation_error, ValidationErrorOptions):
            raise ConfigurationError("validation_error must be a ValidationErrorOptions instance")
        if self.max_depth is not None and (
            not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool) or self.max_depth < 0
        ):
            raise ConfigurationError(f"max_depth must be a non-negative integer or None, got {self.max_depth!r}")
        if self.forbid_non_whitelisted and not self.whitelist:
            object.__setattr__(self, "whitelist", True)

    @property
    def whitelist_check(self) -> bool:
        """True if present fields without any constraint are reported"""
        return self.whitelist or self.forbid_non_whitelisted

    def skips(self, value: Any, missing: Any) -> bool:
        """True if `value` is skipped by the missing value policy (`missing` is the sentinel of absent attributes)"""
        if value is None:
            return self.skip_missing_properties or self.skip_null_properties
        if value is missing:
            return self.skip_missing_properties or self.skip_undefined_properties
        return False

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ValidationOptions":
        """
        Creates options from a plain mapping (e.g. parsed from a configuration file). `validation_error` may be given
        as a nested mapping with the keys `target` and `value`.
        """
        try:
            check_type(mapping, Mapping[str, Any])
        except TypeCheckError as error:
            raise ConfigurationError(f"Options must be a mapping with string keys: {error}") from error
        known = {option.name for option in dataclasses.fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ConfigurationError(f"Unknown validation option(s): {', '.join(sorted(unknown))}")
        kwargs = dict(mapping)
        error_options = kwargs.get("validation_error")
        if isinstance(error_options, Mapping):
            unknown = set(error_options) - {"target", "value"}
            if unknown:
                raise ConfigurationError(f"Unknown validation_error option(s): {', '.join(sorted(unknown))}")
            kwargs["validation_error"] = ValidationErrorOptions(**error_options)
        return cls(**kwargs)


DEFAULT_OPTIONS = ValidationOptions()
