"""
Contains the predicate catalog which maps constraint kinds onto their predicates and default messages.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from . import kinds, predicates
from .context import ConstraintContext
from .errors import ConfigurationError, UnknownConstraintKindError
from .registry import ConstraintRecord
from .types import CustomValidator, Message, PredicateFunction, PredicateResult

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """
    A resolved constraint kind. Plain predicates are called as `predicate(value, *constraint_arguments)`, custom
    validators as `validator.validate(value, context)`.
    """

    kind: str
    predicate: PredicateFunction
    default_message: Message
    context_aware: bool = False

    def invoke(self, value: Any, context: ConstraintContext) -> PredicateResult:
        """Calls the predicate. The result may be a boolean or an awaitable resolving to a boolean."""
        if self.context_aware:
            return self.predicate(value, context)
        return self.predicate(value, *context.constraints)


def _length_message(context: ConstraintContext) -> str:
    minimum = context.constraint(0)
    if isinstance(context.value, str) and len(context.value) < minimum:
        return f"{context.property} must be longer than or equal to {minimum} characters"
    maximum = context.constraint(1)
    if maximum is not None:
        return f"{context.property} must be shorter than or equal to {maximum} characters"
    return f"{context.property} must be a string of at least {minimum} characters"


_BUILTINS: tuple[tuple[str, PredicateFunction, Message], ...] = (
    (kinds.IS_DEFINED, predicates.is_defined, "$property should not be None or missing"),
    (kinds.IS_OPTIONAL, predicates.is_optional, "$property is optional"),
    (kinds.NESTED_VALIDATION, predicates.is_nested_value, "nested property $property must be an object or collection"),
    (kinds.EQUALS, predicates.equals, "$property must be equal to $constraint1"),
    (kinds.NOT_EQUALS, predicates.not_equals, "$property should not be equal to $constraint1"),
    (kinds.IS_EMPTY, predicates.is_empty, "$property must be empty"),
    (kinds.IS_NOT_EMPTY, predicates.is_not_empty, "$property should not be empty"),
    (kinds.IS_IN, predicates.is_in, "$property must be one of the following values: $constraint1"),
    (kinds.IS_NOT_IN, predicates.is_not_in, "$property should not be one of the following values: $constraint1"),
    (kinds.IS_BOOLEAN, predicates.is_boolean, "$property must be a boolean value"),
    (kinds.IS_DATE, predicates.is_date, "$property must be a date instance"),
    (kinds.IS_NUMBER, predicates.is_number, "$property must be a number"),
    (kinds.IS_INT, predicates.is_int, "$property must be an integer number"),
    (kinds.IS_STRING, predicates.is_string, "$property must be a string"),
    (kinds.IS_TYPE, predicates.is_type, "$property must be of type $constraint1"),
    (kinds.IS_DIVISIBLE_BY, predicates.is_divisible_by, "$property must be divisible by $constraint1"),
    (kinds.IS_POSITIVE, predicates.is_positive, "$property must be a positive number"),
    (kinds.IS_NEGATIVE, predicates.is_negative, "$property must be a negative number"),
    (kinds.MIN, predicates.min_value, "$property must not be less than $constraint1"),
    (kinds.MAX, predicates.max_value, "$property must not be greater than $constraint1"),
    (kinds.IS_IN_RANGE, predicates.is_in_range, "$property must be between $constraints"),
    (kinds.MIN_DATE, predicates.min_date, "minimal allowed date for $property is $constraint1"),
    (kinds.MAX_DATE, predicates.max_date, "maximal allowed date for $property is $constraint1"),
    (kinds.IS_BOOLEAN_STRING, predicates.is_boolean_string, "$property must be a boolean string"),
    (kinds.IS_NUMBER_STRING, predicates.is_number_string, "$property must be a number string"),
    (kinds.IS_DATE_STRING, predicates.is_date_string, "$property must be a date string"),
    (kinds.CONTAINS, predicates.contains, "$property must contain a $constraint1 string"),
    (kinds.NOT_CONTAINS, predicates.not_contains, "$property should not contain a $constraint1 string"),
    (kinds.IS_ALPHA, predicates.is_alpha, "$property must contain only letters (a-zA-Z)"),
    (kinds.IS_ALPHANUMERIC, predicates.is_alphanumeric, "$property must contain only letters and numbers"),
    (kinds.IS_ASCII, predicates.is_ascii, "$property must contain only ASCII characters"),
    (kinds.IS_BASE64, predicates.is_base64, "$property must be base64 encoded"),
    (kinds.IS_BYTE_LENGTH, predicates.is_byte_length, "$property's byte length must fall into ($constraints) range"),
    (kinds.IS_CREDIT_CARD, predicates.is_credit_card, "$property must be a credit card"),
    (kinds.IS_CURRENCY, predicates.is_currency, "$property must be a currency"),
    (kinds.IS_EMAIL, predicates.is_email, "$property must be an email"),
    (kinds.IS_FQDN, predicates.is_fqdn, "$property must be a valid domain name"),
    (kinds.IS_FULL_WIDTH, predicates.is_full_width, "$property must contain a full-width characters"),
    (kinds.IS_HALF_WIDTH, predicates.is_half_width, "$property must contain a half-width characters"),
    (
        kinds.IS_VARIABLE_WIDTH,
        predicates.is_variable_width,
        "$property must contain a full-width and half-width characters",
    ),
    (kinds.IS_HEX_COLOR, predicates.is_hex_color, "$property must be a hexadecimal color"),
    (kinds.IS_HEXADECIMAL, predicates.is_hexadecimal, "$property must be a hexadecimal number"),
    (kinds.IS_IP, predicates.is_ip, "$property must be an ip address"),
    (kinds.IS_ISBN, predicates.is_isbn, "$property must be an ISBN"),
    (kinds.IS_ISO8601, predicates.is_iso8601, "$property must be a valid ISO 8601 date string"),
    (kinds.IS_JSON, predicates.is_json, "$property must be a json string"),
    (kinds.IS_LOWERCASE, predicates.is_lowercase, "$property must be a lowercase string"),
    (kinds.IS_UPPERCASE, predicates.is_uppercase, "$property must be uppercase"),
    (kinds.IS_MONGO_ID, predicates.is_mongo_id, "$property must be a mongodb id"),
    (kinds.IS_MULTIBYTE, predicates.is_multibyte, "$property must contain one or more multibyte chars"),
    (kinds.IS_SURROGATE_PAIR, predicates.is_surrogate_pair, "$property must contain any surrogate pairs chars"),
    (kinds.IS_URL, predicates.is_url, "$property must be an URL address"),
    (kinds.IS_UUID, predicates.is_uuid, "$property must be an UUID"),
    (kinds.LENGTH, predicates.length, _length_message),
    (kinds.MIN_LENGTH, predicates.min_length, "$property must be longer than or equal to $constraint1 characters"),
    (kinds.MAX_LENGTH, predicates.max_length, "$property must be shorter than or equal to $constraint1 characters"),
    (kinds.MATCHES, predicates.matches, "$property must match $constraint1 regular expression"),
    (kinds.ARRAY_CONTAINS, predicates.array_contains, "$property must contain $constraint1 values"),
    (kinds.ARRAY_NOT_CONTAINS, predicates.array_not_contains, "$property should not contain $constraint1 values"),
    (kinds.ARRAY_NOT_EMPTY, predicates.array_not_empty, "$property should not be empty"),
    (kinds.ARRAY_MIN_SIZE, predicates.array_min_size, "$property must contain at least $constraint1 elements"),
    (kinds.ARRAY_MAX_SIZE, predicates.array_max_size, "$property must contain not more than $constraint1 elements"),
    (kinds.ARRAY_UNIQUE, predicates.array_unique, "All $property's elements must be unique"),
)

_SYNTHETIC_KINDS = frozenset({kinds.WHITELIST_VALIDATION, kinds.UNKNOWN_VALUE})


class PredicateCatalog:
    """
    Maps constraint kinds onto `CatalogEntry`s. Like the registry the catalog must be complete before the first
    validation run and is only read afterwards.
    """

    def __init__(self, include_builtins: bool = True):
        self._entries: dict[str, CatalogEntry] = {}
        if include_builtins:
            for kind, predicate, message in _BUILTINS:
                self.register(kind, predicate, message)

    def register(self, kind: str, predicate: PredicateFunction, default_message: Message, replace: bool = False):
        """
        Registers a plain predicate `(value, *constraint_arguments) -> bool | Awaitable[bool]` under `kind`.
        """
        self._add(CatalogEntry(kind=kind, predicate=predicate, default_message=default_message), replace)

    def register_validator(
        self,
        kind: str,
        validator: CustomValidator | type[CustomValidator],
        default_message: Optional[Message] = None,
        replace: bool = False,
    ):
        """
        Registers a custom validator under `kind`. `validator` may be an instance or a class which will be
        instantiated without arguments. If `default_message` is not given, the validator's `default_message(context)`
        method is used (if it has one).
        """
        if isinstance(validator, type):
            validator = validator()
        if not isinstance(validator, CustomValidator):
            raise ConfigurationError(f"{validator!r} does not provide a validate(value, context) method")
        if default_message is None:
            default_message = getattr(validator, "default_message", None) or "$property failed the $kind constraint"
        self._add(
            CatalogEntry(kind=kind, predicate=validator.validate, default_message=default_message, context_aware=True),
            replace,
        )

    def _add(self, entry: CatalogEntry, replace: bool):
        if not isinstance(entry.kind, str) or not entry.kind:
            raise ConfigurationError(f"kind must be a non-empty string, got {entry.kind!r}")
        if entry.kind in _SYNTHETIC_KINDS:
            raise ConfigurationError(f"'{entry.kind}' is reserved for errors produced by the engine")
        if not callable(entry.predicate):
            raise ConfigurationError(f"Predicate of '{entry.kind}' is not callable")
        if entry.kind in self._entries and not replace:
            raise ConfigurationError(f"Constraint kind '{entry.kind}' is already registered")
        self._entries[entry.kind] = entry
        _logger.debug("Registered constraint kind '%s'", entry.kind)

    def resolve(self, kind: str) -> CatalogEntry:
        """Returns the entry of `kind` or raises an `UnknownConstraintKindError`"""
        try:
            return self._entries[kind]
        except KeyError as error:
            raise UnknownConstraintKindError(kind) from error

    def check(self, records: Iterable[ConstraintRecord]) -> None:
        """
        Raises an `UnknownConstraintKindError` for the first record whose kind can't be resolved.
        """
        for record in records:
            if record.kind not in self._entries:
                raise UnknownConstraintKindError(record.kind, record.owner_type, record.field_name)

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __len__(self):
        return len(self._entries)


default_catalog = PredicateCatalog()
