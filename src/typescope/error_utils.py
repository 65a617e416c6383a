# ===== MODULE DOCSTRING ===== #
"""Error utilities for the TypeScope package, including custom exceptions and message formatting."""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    Optional, Final,
    Sequence, List, Any
)
import dataclasses
import logging

## ===== LOCAL ===== ##
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'ModelDefect',
    'TypeModelError',
    '_construct_model_error',
    '_describe',
    '_require_type',
]

# ===== CLASSES ===== #

@dataclasses.dataclass(frozen=True)
class ModelDefect:
    """Holds structured details about an invalid type model request.

    Attributes:
        operation (str): The model operation that was refused (e.g. 'make_generic').
        subject_repr (str): Description of the type or member the operation ran on.
        arguments (Sequence[str]): Descriptions of the offending arguments.
        message (Optional[str]): Specific reason for the refusal.
    """
    operation: str
    subject_repr: str
    arguments: Sequence[str] = ()
    message: Optional[str] = None

class TypeModelError(TypeError):
    """Raised when the type model is asked to build something it cannot represent."""
    def __init__(self, message: str, defect: Optional[ModelDefect] = None):
        super().__init__(message)
        self.defect = defect

# ===== FUNCTIONS ===== #

def _describe(subject: Any) -> str:
    """Describe a descriptor for error messages without recursing into the model."""
    full_name = getattr(subject, 'full_name', None)
    if full_name:
        return str(full_name)
    return repr(subject)

def _construct_model_error(defect: ModelDefect) -> TypeModelError:
    """Builds a TypeModelError whose message summarises the defect."""
    message = f"Cannot {defect.operation} on {defect.subject_repr}"
    if defect.arguments:
        message += f" with ({', '.join(defect.arguments)})"
    if defect.message:
        message += f": {defect.message}"
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE error_utils._construct_model_error: {message}")
    return TypeModelError(message, defect=defect)

def _require_type(value: Any, operation: str, subject: Any, role: str) -> None:
    """Raise a TypeModelError when a type argument is missing."""
    if value is None:
        raise _construct_model_error(ModelDefect(
            operation=operation,
            subject_repr=_describe(subject),
            arguments=(f"{role}=None",),
            message=f"{role} must be a type descriptor",
        ))
