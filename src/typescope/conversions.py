# ===== MODULE DOCSTRING ===== #
"""Locates user-defined conversion operators between two types."""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Optional, Final, List
import logging
import enum

## ===== LOCAL ===== ##
from .config import EXPLICIT_OPERATOR_NAME, IMPLICIT_OPERATOR_NAME
from .model import MethodDescriptor, TypeDescriptor
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'ConversionKind',
    'find_conversion_operators',
    'get_explicit_conversion_operator',
    'get_implicit_conversion_operator',
]

# ===== CLASSES ===== #

class ConversionKind(enum.Enum):
    """Which conversion operator to look for, by its declared operator name."""
    IMPLICIT = IMPLICIT_OPERATOR_NAME
    EXPLICIT = EXPLICIT_OPERATOR_NAME

# ===== FUNCTIONS ===== #

def _is_conversion(method: MethodDescriptor, source: TypeDescriptor, target: TypeDescriptor, kind: ConversionKind) -> bool:
    return (method.is_public
            and method.is_static
            and method.is_special_name
            and method.return_type is target
            and method.name == kind.value
            and len(method.parameters) == 1
            and method.parameters[0].parameter_type is source)

def find_conversion_operators(tp: TypeDescriptor, source: TypeDescriptor, target: TypeDescriptor,
                              kind: ConversionKind) -> List[MethodDescriptor]:
    """Find the conversion operators ``tp`` declares from ``source`` to ``target``.

    Only public static operators declared on ``tp`` itself are candidates.
    Several matches are all returned; deciding whether that is an error is
    left to the caller.

    Args:
        tp: The type declaring the operators.
        source: Exact type of the operator's single parameter.
        target: Exact return type of the operator.
        kind: Implicit or explicit conversion.

    Returns:
        The matching operators, possibly empty.
    """
    matches = [m for m in tp.declared_methods if _is_conversion(m, source, target, kind)]
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE conversions.find_conversion_operators: {tp.full_name} {kind.name} "
                   f"{source.full_name} -> {target.full_name}: {len(matches)} match(es)")
    return matches

def _single(matches: List[MethodDescriptor]) -> Optional[MethodDescriptor]:
    return matches[0] if len(matches) == 1 else None

def get_implicit_conversion_operator(tp: TypeDescriptor, source: TypeDescriptor, target: TypeDescriptor) -> Optional[MethodDescriptor]:
    """The single implicit operator from ``source`` to ``target``, or None if there is not exactly one."""
    return _single(find_conversion_operators(tp, source, target, ConversionKind.IMPLICIT))

def get_explicit_conversion_operator(tp: TypeDescriptor, source: TypeDescriptor, target: TypeDescriptor) -> Optional[MethodDescriptor]:
    """The single explicit operator from ``source`` to ``target``, or None if there is not exactly one."""
    return _single(find_conversion_operators(tp, source, target, ConversionKind.EXPLICIT))
