"""
Contains the message formatting. Message templates are `string.Template`s with these placeholders:

- `$property`: the name of the validated field
- `$value`: the validated value
- `$target`: the name of the owner type
- `$kind`: the constraint kind
- `$constraint1`, `$constraint2`, ...: the single constraint arguments
- `$constraints`: all constraint arguments joined by commas
"""
from string import Template
from typing import Any

from .context import ConstraintContext
from .types import Message


def format_argument(argument: Any) -> str:
    """Formats a single constraint argument; collections are joined by commas"""
    if isinstance(argument, (list, tuple, set, frozenset)):
        return ",".join(format_argument(element) for element in argument)
    return str(argument)


def _template_values(context: ConstraintContext) -> dict[str, str]:
    values = {
        "property": context.property,
        "value": format_argument(context.value),
        "target": context.target_name,
        "kind": context.kind,
        "constraints": ",".join(format_argument(argument) for argument in context.constraints),
    }
    for index, argument in enumerate(context.constraints, start=1):
        values[f"constraint{index}"] = format_argument(argument)
    return values


def format_message(message: Message, context: ConstraintContext) -> str:
    """
    Formats `message` for the given context. A callable message is invoked with the context, its result is used
    as is. Unknown placeholders are left untouched.
    """
    if callable(message):
        return str(message(context))
    return Template(message).safe_substitute(_template_values(context))
