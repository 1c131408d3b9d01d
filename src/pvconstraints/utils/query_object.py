"""
Contains utility functions to query the validated objects and to classify their values.
"""
import dataclasses
from collections.abc import Mapping
from typing import Any, Iterator

from typeguard import TypeCheckError, check_type

from pvconstraints.types import MISSING

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


def field_value(obj: Any, field_name: str) -> Any:
    """
    Returns the value of the attribute `field_name` of `obj` or `MISSING` if the attribute is not existent.
    """
    try:
        return getattr(obj, field_name)
    except AttributeError:
        return MISSING


def present_fields(obj: Any) -> tuple[str, ...]:
    """
    Returns the names of the public attributes which are actually present on the instance `obj` (in definition order).
    For dataclasses these are the dataclass fields, otherwise the instance dictionary and `__slots__` are inspected.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        names = [data_field.name for data_field in dataclasses.fields(obj)]
    else:
        names = list(getattr(obj, "__dict__", {}))
        for klass in type(obj).__mro__:
            slots = klass.__dict__.get("__slots__", ())
            names.extend([slots] if isinstance(slots, str) else slots)
    return tuple(
        name for name in dict.fromkeys(names) if not name.startswith("_") and field_value(obj, name) is not MISSING
    )


def is_collection(value: Any) -> bool:
    """
    True for the container types whose elements are validated one by one: sequences (except strings and bytes),
    sets and mappings.
    """
    return isinstance(value, (list, tuple, set, frozenset, Mapping))


def iter_elements(value: Any) -> Iterator[tuple[str, Any]]:
    """
    Yields `(key, element)` pairs of a collection. The key is the index for sequences and sets and the
    (stringified) key for mappings.
    """
    if isinstance(value, Mapping):
        for key, element in value.items():
            yield str(key), element
    else:
        for index, element in enumerate(value):
            yield str(index), element


def is_object_value(value: Any) -> bool:
    """
    True if `value` is a structured object, i.e. neither `None`, `MISSING`, a scalar nor a collection.
    """
    if value is None or value is MISSING or isinstance(value, _SCALAR_TYPES) or is_collection(value):
        return False
    return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")


def matches_type(value: Any, annotation: Any) -> bool:
    """
    Checks `value` against the type annotation `annotation` (e.g. `list[int]` or `Optional[str]`) using typeguard.
    """
    try:
        check_type(value, annotation)
    except TypeCheckError:
        return False
    return True
