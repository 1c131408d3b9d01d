"""
This package enables you to declare validation constraints on the fields of your data classes and to validate
arbitrary instances of them. The result is a tree of errors mirroring the shape of the validated object.
"""

from . import kinds, predicates
from .analysis import ValidationReport
from .catalog import PredicateCatalog, default_catalog
from .context import ConstraintContext
from .declare import Rule, constrained, declare_field, defined, nested, optional, rule
from .errors import (
    ConfigurationError,
    ConstraintEngineError,
    ErrorNode,
    MaxDepthExceededError,
    ObjectValidationError,
    PredicateError,
    UnknownConstraintKindError,
)
from .execution import ValidationManager, default_manager, validate
from .options import ValidationErrorOptions, ValidationOptions
from .registry import ConstraintRecord, ConstraintRegistry, default_registry
from .types import MISSING, CustomValidator
