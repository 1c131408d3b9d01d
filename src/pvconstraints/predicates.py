"""
Contains the built-in predicates. They are pure, synchronous and context free: `predicate(value, *args) -> bool`.
Besides being the implementation of the built-in constraint kinds they can be used for ad hoc checks, e.g.
```
from pvconstraints import predicates

if not predicates.is_in_range(age, 0, 150):
    ...
```
None of the predicates raise for values of an unexpected type; they return False instead.
"""
import base64
import binascii
import ipaddress
import json
import math
import re
import uuid
from collections.abc import Collection, Mapping
from datetime import date, datetime
from typing import Any, Optional
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

from .types import MISSING
from .utils.query_object import is_collection, is_object_value, matches_type

_ALPHA = re.compile(r"^[A-Za-z]+$")
_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
_BASE64 = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
_CREDIT_CARD = re.compile(
    r"^(?:4\d{12}(?:\d{3,6})?|5[1-5]\d{14}|(?:222[1-9]|22[3-9]\d|2[3-6]\d{2}|27[01]\d|2720)\d{12}"
    r"|6(?:011|5\d{2})\d{12,15}|3[47]\d{13}|3(?:0[0-5]|[68]\d)\d{11}|(?:2131|1800|35\d{3})\d{11})$"
)
_CURRENCY = re.compile(r"^(?=.*\d)-?\$?(?:0|[1-9]\d{0,2}(?:,\d{3})*|[1-9]\d*)?(?:\.\d{2})?$")
_HALF_WIDTH_CHARS = r"\u0020-\u007E\uFF61-\uFF9F\uFFA0-\uFFDC\uFFE8-\uFFEE0-9a-zA-Z"
_FULL_WIDTH = re.compile(rf"[^{_HALF_WIDTH_CHARS}]")
_HALF_WIDTH = re.compile(rf"[{_HALF_WIDTH_CHARS}]")
_ISBN10 = re.compile(r"^[0-9]{9}[0-9X]$")
_ISBN13 = re.compile(r"^[0-9]{13}$")
_MULTIBYTE = re.compile(r"[^\x00-\x7F]")
_SURROGATE_PAIR = re.compile(r"[\U00010000-\U0010FFFF]")
_FQDN_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")
_TLD = re.compile(r"^(?:[A-Za-z]{2,}|xn--[A-Za-z0-9-]{2,})$")
_HEX_COLOR = re.compile(r"^#?(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_HEXADECIMAL = re.compile(r"^(?:0[xX])?[0-9a-fA-F]+$")
_NUMBER_STRING = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)$")
_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")
_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})
_URL_SCHEMES = frozenset({"http", "https", "ftp"})


def _is_real_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# common


def is_defined(value: Any) -> bool:
    """True if `value` is neither `None` nor missing"""
    return value is not None and value is not MISSING


def is_optional(value: Any) -> bool:  # pylint: disable=unused-argument
    """Marker predicate. Optionality is evaluated by the engine, the predicate itself always passes."""
    return True


def is_nested_value(value: Any) -> bool:
    """True if `value` is a structured object or a collection (i.e. something which can be validated recursively)"""
    return is_object_value(value) or is_collection(value)


def equals(value: Any, comparison: Any) -> bool:
    """True if `value == comparison`"""
    return bool(value == comparison)


def not_equals(value: Any, comparison: Any) -> bool:
    """True if `value != comparison`"""
    return bool(value != comparison)


def is_empty(value: Any) -> bool:
    """True if `value` is an empty string, `None` or missing"""
    return value == "" or value is None or value is MISSING


def is_not_empty(value: Any) -> bool:
    """True if `value` is neither an empty string nor `None` nor missing"""
    return not is_empty(value)


def is_in(value: Any, possible_values: Collection[Any]) -> bool:
    """True if `value` equals one of the `possible_values`"""
    return any(value == possible_value for possible_value in possible_values)


def is_not_in(value: Any, possible_values: Collection[Any]) -> bool:
    """True if `value` equals none of the `possible_values`"""
    return not is_in(value, possible_values)


# types


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_date(value: Any) -> bool:
    return isinstance(value, date)


def is_number(value: Any, allow_nan: bool = False, allow_infinity: bool = False) -> bool:
    """True for integers and floats (booleans excluded). NaN and infinity have to be allowed explicitly."""
    if not _is_real_number(value):
        return False
    if isinstance(value, float):
        if math.isnan(value):
            return allow_nan
        if math.isinf(value):
            return allow_infinity
    return True


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_type(value: Any, annotation: Any) -> bool:
    """True if `value` matches the type annotation (checked with typeguard, e.g. `is_type([1, 2], list[int])`)"""
    return matches_type(value, annotation)


# numbers


def is_divisible_by(value: Any, divisor: float) -> bool:
    return _is_real_number(value) and divisor != 0 and value % divisor == 0


def is_positive(value: Any) -> bool:
    return is_number(value) and value > 0


def is_negative(value: Any) -> bool:
    return is_number(value) and value < 0


def min_value(value: Any, minimum: float) -> bool:
    return is_number(value) and value >= minimum


def max_value(value: Any, maximum: float) -> bool:
    return is_number(value) and value <= maximum


def is_in_range(value: Any, minimum: float, maximum: float) -> bool:
    """True if `minimum <= value <= maximum`"""
    return is_number(value) and minimum <= value <= maximum


# dates


def _comparable_dates(value: Any, bound: date) -> bool:
    # datetime is a subclass of date but the two can't be compared with each other
    return isinstance(value, date) and isinstance(value, datetime) == isinstance(bound, datetime)


def min_date(value: Any, bound: date) -> bool:
    return _comparable_dates(value, bound) and value >= bound


def max_date(value: Any, bound: date) -> bool:
    return _comparable_dates(value, bound) and value <= bound


# string types


def is_boolean_string(value: Any) -> bool:
    return isinstance(value, str) and value in _BOOLEAN_STRINGS


def is_number_string(value: Any) -> bool:
    return isinstance(value, str) and _NUMBER_STRING.match(value) is not None


def is_iso8601(value: Any) -> bool:
    """True for ISO 8601 date and date time strings (e.g. `2020-02-29` or `2020-02-29T12:00:00Z`)"""
    if not isinstance(value, str) or len(value) < 8:
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_date_string(value: Any) -> bool:
    return is_iso8601(value)


# strings


def contains(value: Any, seed: str) -> bool:
    return isinstance(value, str) and seed in value


def not_contains(value: Any, seed: str) -> bool:
    return isinstance(value, str) and seed not in value


def is_alpha(value: Any) -> bool:
    return isinstance(value, str) and _ALPHA.match(value) is not None


def is_alphanumeric(value: Any) -> bool:
    return isinstance(value, str) and _ALPHANUMERIC.match(value) is not None


def is_ascii(value: Any) -> bool:
    return isinstance(value, str) and value != "" and value.isascii()


def is_base64(value: Any) -> bool:
    if not isinstance(value, str) or value == "" or _BASE64.match(value) is None:
        return False
    try:
        base64.b64decode(value, validate=True)
    except binascii.Error:
        return False
    return True


def is_byte_length(value: Any, minimum: int, maximum: Optional[int] = None) -> bool:
    """True if the UTF-8 encoded `value` has at least `minimum` and at most `maximum` bytes"""
    if not isinstance(value, str):
        return False
    byte_length = len(value.encode("utf-8"))
    return byte_length >= minimum and (maximum is None or byte_length <= maximum)


def _luhn_checksum_valid(digits: str) -> bool:
    total = 0
    for index, digit in enumerate(reversed(digits)):
        number = int(digit)
        if index % 2 == 1:
            number *= 2
            if number > 9:
                number -= 9
        total += number
    return total % 10 == 0


def is_credit_card(value: Any) -> bool:
    """True for card numbers of the common issuers with a valid Luhn checksum. Spaces and dashes are ignored."""
    if not isinstance(value, str):
        return False
    sanitized = re.sub(r"[- ]+", "", value)
    return _CREDIT_CARD.match(sanitized) is not None and _luhn_checksum_valid(sanitized)


def is_currency(value: Any) -> bool:
    """True for dollar amounts like `-$10,123.45`, `10123` or `.99`"""
    return isinstance(value, str) and _CURRENCY.match(value) is not None


def is_fqdn(value: Any, require_tld: bool = True) -> bool:
    """True if `value` is a fully qualified domain name (e.g. `example.com`)"""
    if not isinstance(value, str) or not value or len(value) > 253:
        return False
    labels = value.removesuffix(".").split(".")
    if require_tld:
        if len(labels) < 2 or _TLD.match(labels[-1]) is None:
            return False
    return all(_FQDN_LABEL.match(label) is not None for label in labels)


def is_email(value: Any) -> bool:
    """True if `value` is a syntactically valid email address (the domain is not resolved)"""
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_full_width(value: Any) -> bool:
    """True if the string contains at least one full-width character"""
    return isinstance(value, str) and _FULL_WIDTH.search(value) is not None


def is_half_width(value: Any) -> bool:
    """True if the string contains at least one half-width character"""
    return isinstance(value, str) and _HALF_WIDTH.search(value) is not None


def is_variable_width(value: Any) -> bool:
    """True if the string contains full-width as well as half-width characters"""
    return is_full_width(value) and is_half_width(value)


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and _HEX_COLOR.match(value) is not None


def is_hexadecimal(value: Any) -> bool:
    return isinstance(value, str) and _HEXADECIMAL.match(value) is not None


def is_ip(value: Any, version: Optional[int] = None) -> bool:
    """True if `value` is an IP address string. `version` may restrict it to 4 or 6."""
    if not isinstance(value, str):
        return False
    try:
        address = ipaddress.ip_address(value)
    except ValueError:
        return False
    return version is None or address.version == version


def _isbn10_valid(isbn: str) -> bool:
    if _ISBN10.match(isbn) is None:
        return False
    checksum = sum((index + 1) * int(digit) for index, digit in enumerate(isbn[:9]))
    checksum += 10 * (10 if isbn[9] == "X" else int(isbn[9]))
    return checksum % 11 == 0


def _isbn13_valid(isbn: str) -> bool:
    if _ISBN13.match(isbn) is None:
        return False
    checksum = sum(int(digit) * (3 if index % 2 else 1) for index, digit in enumerate(isbn[:12]))
    return (10 - checksum % 10) % 10 == int(isbn[12])


def is_isbn(value: Any, version: Optional[int | str] = None) -> bool:
    """
    True if `value` is an ISBN with a valid check digit. Spaces and dashes are ignored.
    `version` may restrict it to ISBN-10 or ISBN-13, otherwise both are accepted.
    """
    if not isinstance(value, str):
        return False
    sanitized = re.sub(r"[\s-]+", "", value)
    version = None if version is None else str(version)
    if version not in (None, "10", "13"):
        return False
    return (version != "13" and _isbn10_valid(sanitized)) or (version != "10" and _isbn13_valid(sanitized))


def is_json(value: Any) -> bool:
    """True if `value` is a string containing a JSON object or array"""
    if not isinstance(value, str):
        return False
    try:
        parsed = json.loads(value)
    except ValueError:
        return False
    return isinstance(parsed, (dict, list))


def is_lowercase(value: Any) -> bool:
    return isinstance(value, str) and value == value.lower()


def is_uppercase(value: Any) -> bool:
    return isinstance(value, str) and value == value.upper()


def is_mongo_id(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 24 and _HEXADECIMAL.match(value) is not None


def is_multibyte(value: Any) -> bool:
    """True if the string contains at least one non ASCII character"""
    return isinstance(value, str) and _MULTIBYTE.search(value) is not None


def is_surrogate_pair(value: Any) -> bool:
    """True if the string contains a character outside of the basic multilingual plane (a surrogate pair in UTF-16)"""
    return isinstance(value, str) and _SURROGATE_PAIR.search(value) is not None


def is_url(value: Any) -> bool:
    """True for absolute http(s) and ftp URLs with a valid host"""
    if not isinstance(value, str) or any(char.isspace() for char in value):
        return False
    try:
        parts = urlsplit(value)
        hostname = parts.hostname
        _ = parts.port
    except ValueError:
        return False
    if parts.scheme not in _URL_SCHEMES or not hostname:
        return False
    return hostname == "localhost" or is_fqdn(hostname) or is_ip(hostname)


def is_uuid(value: Any, version: Optional[int] = None) -> bool:
    """True if `value` is a UUID string in its canonical form. `version` may restrict it to 3, 4 or 5."""
    if not isinstance(value, str) or _UUID.match(value) is None:
        return False
    parsed = uuid.UUID(value)
    return version is None or parsed.version == version


def length(value: Any, minimum: int, maximum: Optional[int] = None) -> bool:
    """True if `value` is a string with at least `minimum` and at most `maximum` characters"""
    return isinstance(value, str) and len(value) >= minimum and (maximum is None or len(value) <= maximum)


def min_length(value: Any, minimum: int) -> bool:
    return isinstance(value, str) and len(value) >= minimum


def max_length(value: Any, maximum: int) -> bool:
    return isinstance(value, str) and len(value) <= maximum


def matches(value: Any, pattern: str | re.Pattern, flags: int = 0) -> bool:
    """True if the regular expression `pattern` matches somewhere in the string `value`"""
    if not isinstance(value, str):
        return False
    if isinstance(pattern, re.Pattern):
        return pattern.search(value) is not None
    return re.search(pattern, value, flags) is not None


# arrays


def _is_array(value: Any) -> bool:
    return is_collection(value) and not isinstance(value, Mapping)


def array_contains(value: Any, values: Collection[Any]) -> bool:
    """True if every element of `values` is contained in the collection `value`"""
    return _is_array(value) and all(expected in value for expected in values)


def array_not_contains(value: Any, values: Collection[Any]) -> bool:
    """True if no element of `values` is contained in the collection `value`"""
    return _is_array(value) and all(unexpected not in value for unexpected in values)


def array_not_empty(value: Any) -> bool:
    return _is_array(value) and len(value) > 0


def array_min_size(value: Any, minimum: int) -> bool:
    return _is_array(value) and len(value) >= minimum


def array_max_size(value: Any, maximum: int) -> bool:
    return _is_array(value) and len(value) <= maximum


def array_unique(value: Any) -> bool:
    """True if the collection `value` contains no duplicates (elements need not be hashable)"""
    if not _is_array(value):
        return False
    seen: list[Any] = []
    for element in value:
        if element in seen:
            return False
        seen.append(element)
    return True
