# ===== MODULE DOCSTRING ===== #
"""
Semantic type classification for TypeScope.

The comparator picks a strategy per type: compare by the type's own
equality, member by member, or element by element. These predicates tell
the special shapes apart. All of them are pure and never raise.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import FrozenSet, Final, List
import logging

## ===== LOCAL ===== ##
from .annotations import is_decorated_with
from .config import (
    ANONYMOUS_TYPE_MARKER, CLONE_METHOD_NAME,
    EQUALITY_CONTRACT_NAME, EQUALS_METHOD_NAME,
    TUPLE_ARITIES
)
from .members import find_methods, get_method
from .model import TypeDescriptor
from .logging import _log
from . import runtime

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'has_value_semantics',
    'is_anonymous',
    'is_declared_abstract',
    'is_declared_sealed',
    'is_declared_static',
    'is_key_value_pair',
    'is_record',
    'is_tuple_like',
    'nullable_or_actual_type',
    'overrides_equals',
]

## ===== TUPLE SHAPES ===== ##
_TUPLE_DEFINITIONS: Final[FrozenSet[TypeDescriptor]] = frozenset(
    definition
    for family in (runtime.TUPLES, runtime.VALUE_TUPLES)
    for definition in family
    if len(definition.generic_arguments) in TUPLE_ARITIES
)
# Widest shapes, whose last slot nests the remaining elements
_TUPLE_REST_DEFINITIONS: Final[FrozenSet[TypeDescriptor]] = frozenset(
    (runtime.TUPLES[-1], runtime.VALUE_TUPLES[-1])
)

# ===== FUNCTIONS ===== #

## ===== EQUALITY ===== ##
def overrides_equals(tp: TypeDescriptor) -> bool:
    """Whether the ``Equals(object)`` that ``tp`` resolves to overrides the root's.

    Reference-identity equality comes from the root type; any override along
    the base chain means instances compare by value.
    """
    method = get_method(tp, EQUALS_METHOD_NAME, [runtime.OBJECT], public_only=True)
    if method is None:
        return False
    return method.base_definition().declaring_type is not method.declaring_type

def has_value_semantics(tp: TypeDescriptor) -> bool:
    """Whether instances of ``tp`` should be compared with their own equality.

    Anonymous types, tuples and key/value pairs override equality too, but
    the comparator still looks inside them.
    """
    result = (overrides_equals(tp)
              and not is_anonymous(tp)
              and not is_tuple_like(tp)
              and not is_key_value_pair(tp))
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE classification.has_value_semantics: {tp.full_name} -> {result}")
    return result

## ===== SHAPES ===== ##
def is_tuple_like(tp: TypeDescriptor) -> bool:
    if not tp.is_constructed_generic:
        return False
    definition = tp.generic_definition
    if definition in _TUPLE_DEFINITIONS:
        return True
    if definition in _TUPLE_REST_DEFINITIONS:
        return is_tuple_like(tp.generic_arguments[-1])
    return False

def is_anonymous(tp: TypeDescriptor) -> bool:
    """Compiler-generated anonymous types: marker in the name plus the compiler annotation."""
    if ANONYMOUS_TYPE_MARKER not in tp.full_name:
        return False
    return is_decorated_with(tp, runtime.CompilerGenerated)

def is_record(tp: TypeDescriptor) -> bool:
    """Records expose a synthesized clone method and a compiler-generated ``EqualityContract``."""
    if not find_methods(tp, CLONE_METHOD_NAME, public_only=True):
        return False
    contract = next((p for p in tp.declared_properties if p.name == EQUALITY_CONTRACT_NAME), None)
    if contract is None or contract.getter is None:
        return False
    return is_decorated_with(contract.getter, runtime.CompilerGenerated)

def is_key_value_pair(tp: TypeDescriptor) -> bool:
    return tp.is_constructed_generic and tp.generic_definition is runtime.KEY_VALUE_PAIR

def nullable_or_actual_type(tp: TypeDescriptor) -> TypeDescriptor:
    """If ``tp`` is a nullable wrapper, the wrapped type; otherwise ``tp`` itself."""
    if tp.is_constructed_generic and tp.generic_definition is runtime.NULLABLE:
        return tp.generic_arguments[0]
    return tp

## ===== DECLARATION MODIFIERS ===== ##
def is_declared_abstract(tp: TypeDescriptor) -> bool:
    return tp.is_abstract and not tp.is_sealed

def is_declared_sealed(tp: TypeDescriptor) -> bool:
    return tp.is_sealed and not tp.is_abstract

def is_declared_static(tp: TypeDescriptor) -> bool:
    """Static classes are both abstract and sealed."""
    return tp.is_abstract and tp.is_sealed
