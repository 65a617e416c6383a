# ===== MODULE DOCSTRING ===== #
"""
Type relationship resolution for TypeScope.

Answers "is this type compatible with that one?" for concrete types and for
open generic shapes. The native model only knows how to assign closed
types; an open definition such as ``List`1`` is never an assignment target
by itself, so matching against it is defined here explicitly:

- Interface definitions match when the subject, or any interface in its
  transitive set, is a closed instantiation of the definition.
- Class and struct definitions match when the subject is the definition, or
  when the subject or an ancestor in its base chain instantiates it.

Definitions are compared by identity, never by argument lists.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Optional, Final, Tuple, List
import logging

## ===== LOCAL ===== ##
from .model import MemberDescriptor, TypeDescriptor
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'get_closed_generic_interfaces',
    'implements_open_generic',
    'is_assignable_to_open_generic',
    'is_derived_from_open_generic',
    'is_equivalent_to',
    'is_same_or_inherits',
    'is_under_namespace',
]

# ===== FUNCTIONS ===== #

## ===== CLOSED TYPES ===== ##
def is_same_or_inherits(actual: TypeDescriptor, expected: TypeDescriptor) -> bool:
    """Check whether ``actual`` is ``expected`` or reaches it through bases or interfaces.

    Args:
        actual: The subject type.
        expected: The type it should be, derive from, or implement.

    Returns:
        True if a value of ``actual`` can be stored as ``expected``.
    """
    return actual is expected or expected.is_assignable_from(actual)

## ===== OPEN GENERICS ===== ##
def _instantiates(tp: TypeDescriptor, definition: TypeDescriptor) -> bool:
    return tp.is_generic and tp.generic_definition is definition

def implements_open_generic(actual: TypeDescriptor, definition: TypeDescriptor) -> bool:
    """Check ``actual`` against an open interface definition.

    True when ``actual`` is itself an instantiation of the interface, or when
    any interface it implements (transitively) is one.
    """
    if actual.is_interface and _instantiates(actual, definition):
        return True
    return any(_instantiates(interface, definition) for interface in actual.get_interfaces())

def is_derived_from_open_generic(actual: TypeDescriptor, definition: TypeDescriptor) -> bool:
    """Check whether ``actual`` or one of its base types instantiates ``definition``.

    A type is never considered derived from itself, so passing a definition as
    its own subject yields False.
    """
    if actual is definition:
        if _log.isEnabledFor(logging.DEBUG):
            _log.debug(f"TRACE relationships.is_derived_from_open_generic: {actual.full_name} is the definition itself. Result: False")
        return False

    for ancestor in actual.iter_base_chain():
        if _instantiates(ancestor, definition):
            if _log.isEnabledFor(logging.DEBUG):
                _log.debug(f"TRACE relationships.is_derived_from_open_generic: {actual.full_name} reaches {ancestor.full_name}. Result: True")
            return True
    return False

def is_assignable_to_open_generic(actual: TypeDescriptor, definition: TypeDescriptor) -> bool:
    """Check whether ``actual`` fits the shape of an open generic definition.

    Args:
        actual: The subject type.
        definition: An open generic definition, e.g. ``List`1`` or ``IEnumerable`1``.

    Returns:
        True if ``actual`` is some instantiation of ``definition``, inherits from
        one, or implements one.
    """
    if definition.is_interface:
        result = implements_open_generic(actual, definition)
    else:
        result = actual is definition or is_derived_from_open_generic(actual, definition)
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE relationships.is_assignable_to_open_generic: {actual.full_name} -> {definition.full_name}: {result}")
    return result

def get_closed_generic_interfaces(tp: TypeDescriptor, definition: TypeDescriptor) -> Tuple[TypeDescriptor, ...]:
    """All closed instantiations of ``definition`` that ``tp`` is or implements.

    If ``tp`` is an instantiation of ``definition`` it is the only result.
    """
    if _instantiates(tp, definition):
        return (tp,)
    return tuple(i for i in tp.get_interfaces() if _instantiates(i, definition))

## ===== MEMBERS & NAMESPACES ===== ##
def is_equivalent_to(member: MemberDescriptor, other: MemberDescriptor) -> bool:
    """Whether two members refer to the same member of related types."""
    related = (is_same_or_inherits(member.declaring_type, other.declaring_type)
               or is_same_or_inherits(other.declaring_type, member.declaring_type))
    return related and member.name == other.name

def is_under_namespace(tp: TypeDescriptor, namespace: Optional[str]) -> bool:
    """Whether ``tp`` lives in ``namespace`` or one of its child namespaces.

    ``None`` stands for the global namespace, which contains every type.
    """
    if namespace is None:
        return True
    own = tp.namespace
    if own is None or not own.startswith(namespace):
        return False
    return len(own) == len(namespace) or own[len(namespace)] == '.'
