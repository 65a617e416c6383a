# ===== MODULE DOCSTRING ===== #
"""
Well-known type universe for TypeScope.

This module builds, once at import time, the descriptors every other type
in a universe hangs off: the root object type, value types, primitives,
string, the nullable wrapper, the key/value pair, both tuple families and a
handful of generic collection interfaces. The classifier and the display
name formatter recognise these shapes by identity.

User types are declared with the ``define_*`` helpers, which fill in the
conventional base type for each kind:

    from typescope import runtime

    person = runtime.define_class('Person', 'App.Domain')
    person.declare_property('Name', runtime.STRING)
    person.declare_field('Age', runtime.INT32)
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    Optional, Sequence, Mapping,
    Final, Tuple, List
)
import types

## ===== LOCAL ===== ##
from .config import EQUALS_METHOD_NAME, TUPLE_REST_ARITY
from .model import Accessibility, TypeDescriptor, TypeKind

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'CompilerGenerated',
    'define_class', 'define_enum', 'define_interface', 'define_struct',
    'OBJECT', 'VALUE_TYPE', 'ENUM', 'ARRAY', 'VOID', 'STRING',
    'BOOLEAN', 'CHAR', 'SBYTE', 'BYTE', 'INT16', 'UINT16', 'INT32', 'UINT32',
    'INT64', 'UINT64', 'SINGLE', 'DOUBLE', 'DECIMAL',
    'NULLABLE', 'KEY_VALUE_PAIR', 'TUPLES', 'VALUE_TUPLES',
    'IEQUATABLE', 'IENUMERABLE', 'ICOLLECTION', 'ILIST', 'LIST',
    'IDICTIONARY', 'DICTIONARY',
    'PRIMITIVE_ALIASES',
]

SYSTEM: Final[str] = 'System'
COLLECTIONS: Final[str] = 'System.Collections.Generic'

# ===== CLASSES ===== #

class CompilerGenerated:
    """Annotation marking a type or accessor as emitted by the compiler."""

    def __repr__(self) -> str:
        return 'CompilerGenerated()'

# ===== FUNCTIONS ===== #

def define_class(name: str, namespace: Optional[str] = None,
                 base_type: Optional[TypeDescriptor] = None,
                 interfaces: Sequence[TypeDescriptor] = (),
                 generic_parameters: Sequence[str] = (),
                 is_abstract: bool = False, is_sealed: bool = False) -> TypeDescriptor:
    """Declare a reference type. The base type defaults to ``OBJECT``."""
    return TypeDescriptor(name, namespace, TypeKind.CLASS,
                          base_type=base_type if base_type is not None else OBJECT,
                          interfaces=interfaces, generic_parameters=generic_parameters,
                          is_abstract=is_abstract, is_sealed=is_sealed)

def define_struct(name: str, namespace: Optional[str] = None,
                  interfaces: Sequence[TypeDescriptor] = (),
                  generic_parameters: Sequence[str] = ()) -> TypeDescriptor:
    """Declare a value type. Value types are sealed and derive from ``VALUE_TYPE``."""
    return TypeDescriptor(name, namespace, TypeKind.VALUE, base_type=VALUE_TYPE,
                          interfaces=interfaces, generic_parameters=generic_parameters,
                          is_sealed=True)

def define_interface(name: str, namespace: Optional[str] = None,
                     extends: Sequence[TypeDescriptor] = (),
                     generic_parameters: Sequence[str] = ()) -> TypeDescriptor:
    """Declare an interface. Interfaces have no base type."""
    return TypeDescriptor(name, namespace, TypeKind.INTERFACE,
                          interfaces=extends, generic_parameters=generic_parameters)

def define_enum(name: str, namespace: Optional[str] = None) -> TypeDescriptor:
    return TypeDescriptor(name, namespace, TypeKind.ENUM, base_type=ENUM, is_sealed=True)

def _primitive(name: str) -> TypeDescriptor:
    return TypeDescriptor(name, SYSTEM, TypeKind.VALUE, base_type=VALUE_TYPE, is_sealed=True)

def _overrides_equals(tp: TypeDescriptor) -> TypeDescriptor:
    tp.declare_method(EQUALS_METHOD_NAME, [OBJECT], return_type=BOOLEAN, is_override=True)
    return tp

def _tuple_family(name: str, value_family: bool) -> Tuple[TypeDescriptor, ...]:
    """Build arities 1 through 8; the widest shape carries the rest in ``TRest``."""
    family = []
    for arity in range(1, TUPLE_REST_ARITY + 1):
        params = [f"T{i}" for i in range(1, min(arity, TUPLE_REST_ARITY - 1) + 1)]
        if arity == TUPLE_REST_ARITY:
            params.append('TRest')
        if value_family:
            tp = define_struct(name, SYSTEM, generic_parameters=params)
        else:
            tp = define_class(name, SYSTEM, generic_parameters=params, is_sealed=True)
        for position, param in enumerate(tp.generic_arguments, start=1):
            member = 'Rest' if param.name == 'TRest' else f"Item{position}"
            if value_family:
                tp.declare_field(member, param)
            else:
                tp.declare_property(member, param)
        family.append(_overrides_equals(tp))
    return tuple(family)

# ===== UNIVERSE ===== #

## ===== ROOTS ===== ##
OBJECT: Final[TypeDescriptor] = TypeDescriptor('Object', SYSTEM, TypeKind.CLASS)
VALUE_TYPE: Final[TypeDescriptor] = TypeDescriptor('ValueType', SYSTEM, TypeKind.CLASS, base_type=OBJECT, is_abstract=True)
ENUM: Final[TypeDescriptor] = TypeDescriptor('Enum', SYSTEM, TypeKind.CLASS, base_type=VALUE_TYPE, is_abstract=True)
ARRAY: Final[TypeDescriptor] = TypeDescriptor('Array', SYSTEM, TypeKind.CLASS, base_type=OBJECT, is_abstract=True)
TypeDescriptor.array_base_type = ARRAY

## ===== PRIMITIVES ===== ##
VOID: Final[TypeDescriptor] = _primitive('Void')
BOOLEAN: Final[TypeDescriptor] = _primitive('Boolean')
CHAR: Final[TypeDescriptor] = _primitive('Char')
SBYTE: Final[TypeDescriptor] = _primitive('SByte')
BYTE: Final[TypeDescriptor] = _primitive('Byte')
INT16: Final[TypeDescriptor] = _primitive('Int16')
UINT16: Final[TypeDescriptor] = _primitive('UInt16')
INT32: Final[TypeDescriptor] = _primitive('Int32')
UINT32: Final[TypeDescriptor] = _primitive('UInt32')
INT64: Final[TypeDescriptor] = _primitive('Int64')
UINT64: Final[TypeDescriptor] = _primitive('UInt64')
SINGLE: Final[TypeDescriptor] = _primitive('Single')
DOUBLE: Final[TypeDescriptor] = _primitive('Double')
DECIMAL: Final[TypeDescriptor] = _primitive('Decimal')
STRING: Final[TypeDescriptor] = define_class('String', SYSTEM, is_sealed=True)

# Reference identity on the root, member-wise equality on every value type
OBJECT.declare_method(EQUALS_METHOD_NAME, [OBJECT], return_type=BOOLEAN, is_virtual=True)
_overrides_equals(VALUE_TYPE)
_overrides_equals(STRING)

## ===== GENERIC COLLECTIONS ===== ##
IEQUATABLE: Final[TypeDescriptor] = define_interface('IEquatable', SYSTEM, generic_parameters=['T'])
IENUMERABLE: Final[TypeDescriptor] = define_interface('IEnumerable', COLLECTIONS, generic_parameters=['T'])
ICOLLECTION: Final[TypeDescriptor] = define_interface('ICollection', COLLECTIONS, generic_parameters=['T'])
ICOLLECTION.implement(IENUMERABLE.make_generic(*ICOLLECTION.generic_arguments))
ICOLLECTION.declare_property('Count', INT32)
ILIST: Final[TypeDescriptor] = define_interface('IList', COLLECTIONS, generic_parameters=['T'])
ILIST.implement(ICOLLECTION.make_generic(*ILIST.generic_arguments))
ILIST.declare_property('Item', ILIST.generic_arguments[0], setter=Accessibility.PUBLIC,
                       index_parameters=[INT32])
# Single-dimension arrays implement IList`1 over their element type
TypeDescriptor.array_interface_definition = ILIST
LIST: Final[TypeDescriptor] = define_class('List', COLLECTIONS, generic_parameters=['T'])
LIST.implement(ILIST.make_generic(*LIST.generic_arguments))
LIST.declare_property('Count', INT32)
LIST.declare_property('Item', LIST.generic_arguments[0], index_parameters=[INT32])

## ===== SPECIAL SHAPES ===== ##
NULLABLE: Final[TypeDescriptor] = define_struct('Nullable', SYSTEM, generic_parameters=['T'])
NULLABLE.declare_property('HasValue', BOOLEAN)
NULLABLE.declare_property('Value', NULLABLE.generic_arguments[0])

KEY_VALUE_PAIR: Final[TypeDescriptor] = define_struct('KeyValuePair', COLLECTIONS, generic_parameters=['TKey', 'TValue'])
KEY_VALUE_PAIR.declare_property('Key', KEY_VALUE_PAIR.generic_arguments[0])
KEY_VALUE_PAIR.declare_property('Value', KEY_VALUE_PAIR.generic_arguments[1])

IDICTIONARY: Final[TypeDescriptor] = define_interface('IDictionary', COLLECTIONS, generic_parameters=['TKey', 'TValue'])
IDICTIONARY.implement(ICOLLECTION.make_generic(KEY_VALUE_PAIR.make_generic(*IDICTIONARY.generic_arguments)))
DICTIONARY: Final[TypeDescriptor] = define_class('Dictionary', COLLECTIONS, generic_parameters=['TKey', 'TValue'])
DICTIONARY.implement(IDICTIONARY.make_generic(*DICTIONARY.generic_arguments))
DICTIONARY.declare_property('Count', INT32)

TUPLES: Final[Tuple[TypeDescriptor, ...]] = _tuple_family('Tuple', value_family=False)
VALUE_TUPLES: Final[Tuple[TypeDescriptor, ...]] = _tuple_family('ValueTuple', value_family=True)

## ===== PRIMITIVE ALIASES ===== ##
# Read-only view; no mutation path exists after import
PRIMITIVE_ALIASES: Final[Mapping[TypeDescriptor, str]] = types.MappingProxyType({
    INT32: 'int',
    UINT32: 'uint',
    INT64: 'long',
    UINT64: 'ulong',
    INT16: 'short',
    UINT16: 'ushort',
    BYTE: 'byte',
    SBYTE: 'sbyte',
    BOOLEAN: 'bool',
    SINGLE: 'float',
    DOUBLE: 'double',
    DECIMAL: 'decimal',
    CHAR: 'char',
    STRING: 'string',
    OBJECT: 'object',
    VOID: 'void',
})
