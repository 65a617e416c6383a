# ===== MODULE DOCSTRING ===== #
"""
Type metadata model for TypeScope.

This module defines the descriptors every other TypeScope module reasons
about. A descriptor stands for one runtime type or member:
- TypeDescriptor: a class, interface, value type, enum, array or generic parameter
- PropertyDescriptor / FieldDescriptor: the comparable members of a type
- MethodDescriptor: methods, operators and constructors
- AnnotationRecord: opaque metadata attached to any of the above

Descriptors are compared by identity. Closed generic instantiations and
array types are interned, so asking for ``List`1[int]`` twice yields the
same object and recursive generic shapes never need structural comparison.

The owner of a type universe builds descriptors once (``declare_*``,
``implement``, ``annotate``) and treats them as immutable afterwards. All
query modules only read them.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    ClassVar, Iterator, Deque,
    Optional, Sequence, Union,
    Final, Tuple, Dict, List, Any
)
import collections
import dataclasses
import threading
import logging
import enum

## ===== LOCAL ===== ##
from .config import GENERIC_ARITY_SEPARATOR, CONSTRUCTOR_NAME
from .error_utils import ModelDefect, _construct_model_error, _describe, _require_type
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'Accessibility',
    'AccessorDescriptor',
    'AnnotationRecord',
    'FieldDescriptor',
    'MemberDescriptor',
    'MethodDescriptor',
    'ParameterDescriptor',
    'PropertyDescriptor',
    'TypeDescriptor',
    'TypeKind',
]

## ===== INTERNING ===== ##
# Guards interning of closed generics and arrays, and the lazy derivation of
# members for closed generics. Re-entrant because substitution interns.
_model_lock = threading.RLock()

# ===== ENUMS ===== #

class TypeKind(enum.Enum):
    """Structural category of a type descriptor."""
    CLASS = 'class'
    INTERFACE = 'interface'
    VALUE = 'value'
    ENUM = 'enum'
    ARRAY = 'array'
    GENERIC_PARAMETER = 'generic'

class Accessibility(enum.Enum):
    """Declared visibility of a member or accessor."""
    PUBLIC = 'public'
    PROTECTED = 'protected'
    INTERNAL = 'internal'
    PRIVATE = 'private'

    @property
    def is_reachable(self) -> bool:
        """Whether a caller outside the declaring type can read through it."""
        return self in (Accessibility.PUBLIC, Accessibility.PROTECTED)

# Most visible first, used to derive a property's accessibility from its accessors
_VISIBILITY_ORDER: Final[Tuple[Accessibility, ...]] = (
    Accessibility.PUBLIC,
    Accessibility.PROTECTED,
    Accessibility.INTERNAL,
    Accessibility.PRIVATE,
)

# ===== ANNOTATIONS ===== #

@dataclasses.dataclass(frozen=True)
class AnnotationRecord:
    """An annotation attached to a type, member, method or accessor.

    Attributes:
        payload (Any): The annotation object itself. Never mutated.
        key (type): Annotation type identity. Defaults to ``type(payload)``.
        inherited (bool): True when the record was found on an ancestor
            declaration rather than on the queried subject.
        inheritable (bool): Whether the annotation flows to derived declarations.
    """
    payload: Any
    key: Optional[type] = None
    inherited: bool = False
    inheritable: bool = True

    def __post_init__(self):
        if self.key is None:
            object.__setattr__(self, 'key', type(self.payload))

    def as_inherited(self) -> 'AnnotationRecord':
        return dataclasses.replace(self, inherited=True)

class _Annotated:
    """Mixin holding the annotations declared on a descriptor."""

    def __init__(self) -> None:
        self._annotations: List[AnnotationRecord] = []

    @property
    def annotations(self) -> Tuple[AnnotationRecord, ...]:
        return tuple(self._annotations)

    def annotate(self, payload: Any, key: Optional[type] = None, inheritable: bool = True):
        """Attach an annotation and return self so declarations can chain."""
        self._annotations.append(AnnotationRecord(payload=payload, key=key, inheritable=inheritable))
        return self

    def base_declaration(self) -> Optional['_Annotated']:
        """The ancestor declaration this one overrides, if any."""
        return None

# ===== MEMBERS ===== #

@dataclasses.dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    parameter_type: 'TypeDescriptor'

ParameterSpec = Union['TypeDescriptor', ParameterDescriptor]

def _to_parameters(parameters: Sequence[ParameterSpec], owner: Any, operation: str) -> Tuple[ParameterDescriptor, ...]:
    result = []
    for index, parameter in enumerate(parameters):
        if isinstance(parameter, ParameterDescriptor):
            result.append(parameter)
        else:
            _require_type(parameter, operation, owner, f"parameter[{index}]")
            result.append(ParameterDescriptor(f"arg{index}", parameter))
    return tuple(result)

class AccessorDescriptor(_Annotated):
    """The get or set accessor of a property, with its own visibility."""

    def __init__(self, kind: str, accessibility: Accessibility, owner: 'PropertyDescriptor'):
        super().__init__()
        self.kind = kind
        self.accessibility = accessibility
        self.owner = owner

    def __repr__(self) -> str:
        return f"<AccessorDescriptor {self.kind} {self.owner.name} ({self.accessibility.value})>"

class MemberDescriptor(_Annotated):
    """Base for the members that can take part in a comparison."""

    member_kind: ClassVar[str] = 'member'

    def __init__(self, name: str, declaring_type: 'TypeDescriptor', value_type: 'TypeDescriptor',
                 accessibility: Accessibility = Accessibility.PUBLIC, is_static: bool = False):
        super().__init__()
        self.name = name
        self.declaring_type = declaring_type
        self.value_type = value_type
        self.accessibility = accessibility
        self.is_static = is_static

    @property
    def is_indexer(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.declaring_type.name}.{self.name}: {self.value_type.name}>"

class PropertyDescriptor(MemberDescriptor):
    """A property. Readability is decided by the getter's own accessibility."""

    member_kind: ClassVar[str] = 'property'

    def __init__(self, name: str, declaring_type: 'TypeDescriptor', value_type: 'TypeDescriptor',
                 getter: Optional[Accessibility] = Accessibility.PUBLIC,
                 setter: Optional[Accessibility] = None,
                 index_parameters: Sequence[ParameterSpec] = (),
                 is_static: bool = False, is_override: bool = False):
        visible = [a for a in _VISIBILITY_ORDER if a in (getter, setter)]
        super().__init__(name, declaring_type, value_type,
                         accessibility=visible[0] if visible else Accessibility.PRIVATE,
                         is_static=is_static)
        self.getter = AccessorDescriptor('get', getter, self) if getter is not None else None
        self.setter = AccessorDescriptor('set', setter, self) if setter is not None else None
        self.index_parameters = _to_parameters(index_parameters, declaring_type, 'declare_property')
        self.is_override = is_override

    @property
    def is_indexer(self) -> bool:
        return len(self.index_parameters) != 0

    @property
    def index_parameter_types(self) -> Tuple['TypeDescriptor', ...]:
        return tuple(p.parameter_type for p in self.index_parameters)

    def base_declaration(self) -> Optional['PropertyDescriptor']:
        if not self.is_override:
            return None
        signature = self.index_parameter_types
        for ancestor in self.declaring_type.iter_base_chain(include_self=False):
            for candidate in ancestor.declared_properties:
                if candidate.name == self.name and candidate.index_parameter_types == signature:
                    return candidate
        return None

    def _bind(self, declaring_type: 'TypeDescriptor', bindings: Dict['TypeDescriptor', 'TypeDescriptor']) -> 'PropertyDescriptor':
        bound = PropertyDescriptor(
            self.name, declaring_type, _substitute(self.value_type, bindings),
            getter=self.getter.accessibility if self.getter else None,
            setter=self.setter.accessibility if self.setter else None,
            index_parameters=[ParameterDescriptor(p.name, _substitute(p.parameter_type, bindings))
                              for p in self.index_parameters],
            is_static=self.is_static, is_override=self.is_override,
        )
        bound._annotations = self._annotations
        if bound.getter is not None:
            bound.getter._annotations = self.getter._annotations
        if bound.setter is not None:
            bound.setter._annotations = self.setter._annotations
        return bound

class FieldDescriptor(MemberDescriptor):
    """A field. Fields never override, so they have no base declaration."""

    member_kind: ClassVar[str] = 'field'

    def _bind(self, declaring_type: 'TypeDescriptor', bindings: Dict['TypeDescriptor', 'TypeDescriptor']) -> 'FieldDescriptor':
        bound = FieldDescriptor(self.name, declaring_type, _substitute(self.value_type, bindings),
                                accessibility=self.accessibility, is_static=self.is_static)
        bound._annotations = self._annotations
        return bound

class MethodDescriptor(_Annotated):
    """A method, operator or constructor signature."""

    def __init__(self, name: str, declaring_type: 'TypeDescriptor',
                 parameters: Sequence[ParameterSpec] = (),
                 return_type: Optional['TypeDescriptor'] = None,
                 accessibility: Accessibility = Accessibility.PUBLIC,
                 is_static: bool = False, is_special_name: bool = False,
                 is_virtual: bool = False, is_override: bool = False,
                 is_constructor: bool = False):
        super().__init__()
        self.name = name
        self.declaring_type = declaring_type
        self.parameters = _to_parameters(parameters, declaring_type, 'declare_method')
        self.return_type = return_type
        self.accessibility = accessibility
        self.is_static = is_static
        self.is_special_name = is_special_name
        self.is_virtual = is_virtual or is_override
        self.is_override = is_override
        self.is_constructor = is_constructor

    @property
    def parameter_types(self) -> Tuple['TypeDescriptor', ...]:
        return tuple(p.parameter_type for p in self.parameters)

    @property
    def is_public(self) -> bool:
        return self.accessibility is Accessibility.PUBLIC

    def base_declaration(self) -> Optional['MethodDescriptor']:
        if not self.is_override:
            return None
        signature = self.parameter_types
        for ancestor in self.declaring_type.iter_base_chain(include_self=False):
            for candidate in ancestor.declared_methods:
                if (candidate.name == self.name and candidate.is_virtual
                        and candidate.parameter_types == signature):
                    return candidate
        return None

    def base_definition(self) -> 'MethodDescriptor':
        """Follow the override chain to the method that introduced the slot."""
        method = self
        ancestor = method.base_declaration()
        while ancestor is not None:
            method = ancestor
            ancestor = method.base_declaration()
        return method

    def _bind(self, declaring_type: 'TypeDescriptor', bindings: Dict['TypeDescriptor', 'TypeDescriptor']) -> 'MethodDescriptor':
        bound = MethodDescriptor(
            self.name, declaring_type,
            parameters=[ParameterDescriptor(p.name, _substitute(p.parameter_type, bindings)) for p in self.parameters],
            return_type=_substitute(self.return_type, bindings),
            accessibility=self.accessibility, is_static=self.is_static,
            is_special_name=self.is_special_name, is_virtual=self.is_virtual,
            is_override=self.is_override, is_constructor=self.is_constructor,
        )
        bound._annotations = self._annotations
        return bound

    def __repr__(self) -> str:
        params = ', '.join(p.parameter_type.name for p in self.parameters)
        return f"<MethodDescriptor {self.declaring_type.name}.{self.name}({params})>"

# ===== TYPES ===== #

class TypeDescriptor(_Annotated):
    """Identity and structural relationships of one runtime type.

    Generic definitions are declared with ``generic_parameters`` (parameter
    names); closed instantiations come from ``make_generic`` and arrays from
    ``make_array``. Both are interned on the descriptor they derive from.
    """

    # Base type of every array; installed by typescope.runtime
    array_base_type: ClassVar[Optional['TypeDescriptor']] = None
    # Generic interface single-dimension arrays implement over their element type
    array_interface_definition: ClassVar[Optional['TypeDescriptor']] = None

    def __init__(self, name: str, namespace: Optional[str] = None,
                 kind: TypeKind = TypeKind.CLASS,
                 base_type: Optional['TypeDescriptor'] = None,
                 interfaces: Sequence['TypeDescriptor'] = (),
                 generic_parameters: Sequence[str] = (),
                 is_abstract: bool = False, is_sealed: bool = False):
        super().__init__()
        if generic_parameters and GENERIC_ARITY_SEPARATOR not in name:
            name = f"{name}{GENERIC_ARITY_SEPARATOR}{len(generic_parameters)}"
        self.name = name
        self.namespace = namespace
        self.kind = kind
        self.is_abstract = is_abstract or kind is TypeKind.INTERFACE
        self.is_sealed = is_sealed
        self._base_type = base_type
        self._interfaces: List['TypeDescriptor'] = list(interfaces)
        self._properties: List[PropertyDescriptor] = []
        self._fields: List[FieldDescriptor] = []
        self._methods: List[MethodDescriptor] = []

        # Generic shape
        self._definition: Optional['TypeDescriptor'] = None
        self._arguments: Tuple['TypeDescriptor', ...] = tuple(
            _GenericParameter(param, self, position) for position, param in enumerate(generic_parameters)
        )
        self._instances: Dict[Tuple['TypeDescriptor', ...], 'TypeDescriptor'] = {}
        self._derived: bool = True

        # Array shape
        self._element_type: Optional['TypeDescriptor'] = None
        self._rank: int = 0
        self._arrays: Dict[int, 'TypeDescriptor'] = {}

    # ----- identity -----

    @property
    def full_name(self) -> str:
        if self._definition is not None:
            args = ', '.join(a.full_name for a in self._arguments)
            return f"{self._definition.full_name}[{args}]"
        return f"{self.namespace}.{self.name}" if self.namespace else self.name

    def __repr__(self) -> str:
        return f"<TypeDescriptor {self.full_name} ({self.kind.value})>"

    # ----- kind -----

    @property
    def is_interface(self) -> bool:
        return self.kind is TypeKind.INTERFACE

    @property
    def is_value_type(self) -> bool:
        return self.kind in (TypeKind.VALUE, TypeKind.ENUM)

    @property
    def is_enum(self) -> bool:
        return self.kind is TypeKind.ENUM

    @property
    def is_array(self) -> bool:
        return self.kind is TypeKind.ARRAY

    @property
    def is_generic_parameter(self) -> bool:
        return self.kind is TypeKind.GENERIC_PARAMETER

    # ----- generic shape -----

    @property
    def is_generic(self) -> bool:
        return len(self._arguments) != 0

    @property
    def is_generic_definition(self) -> bool:
        return self.is_generic and self._definition is None

    @property
    def is_constructed_generic(self) -> bool:
        return self._definition is not None

    @property
    def generic_definition(self) -> Optional['TypeDescriptor']:
        if self._definition is not None:
            return self._definition
        return self if self.is_generic else None

    @property
    def generic_arguments(self) -> Tuple['TypeDescriptor', ...]:
        return self._arguments

    def make_generic(self, *arguments: 'TypeDescriptor') -> 'TypeDescriptor':
        """Return the interned closed instantiation of this definition."""
        if not self.is_generic_definition:
            raise _construct_model_error(ModelDefect(
                operation='make_generic', subject_repr=_describe(self),
                arguments=tuple(_describe(a) for a in arguments),
                message="only generic definitions can be instantiated",
            ))
        if len(arguments) != len(self._arguments):
            raise _construct_model_error(ModelDefect(
                operation='make_generic', subject_repr=_describe(self),
                arguments=tuple(_describe(a) for a in arguments),
                message=f"expected {len(self._arguments)} type arguments, got {len(arguments)}",
            ))
        for index, argument in enumerate(arguments):
            _require_type(argument, 'make_generic', self, f"arguments[{index}]")
        if all(a is p for a, p in zip(arguments, self._arguments)):
            # Instantiating a definition over its own parameters is the definition
            return self

        key = tuple(arguments)
        instance = self._instances.get(key)
        if instance is not None:
            return instance
        with _model_lock:
            instance = self._instances.get(key)
            if instance is None:
                instance = TypeDescriptor(self.name, self.namespace, self.kind,
                                          is_abstract=self.is_abstract, is_sealed=self.is_sealed)
                instance._definition = self
                instance._arguments = key
                instance._annotations = self._annotations
                instance._derived = False
                self._instances[key] = instance
                if _log.isEnabledFor(logging.DEBUG):
                    _log.debug(f"TRACE model.make_generic: Interned {instance.full_name}")
        return instance

    def _ensure_derived(self) -> None:
        """Derive base, interfaces and members of a closed instantiation."""
        if self._derived:
            return
        with _model_lock:
            if self._derived:
                return
            definition = self._definition
            bindings = dict(zip(definition._arguments, self._arguments))
            self._base_type = _substitute(definition.base_type, bindings)
            self._interfaces = [_substitute(i, bindings) for i in definition.interfaces]
            self._properties = [p._bind(self, bindings) for p in definition.declared_properties]
            self._fields = [f._bind(self, bindings) for f in definition.declared_fields]
            self._methods = [m._bind(self, bindings) for m in definition.declared_methods]
            self._derived = True
            if _log.isEnabledFor(logging.DEBUG):
                _log.debug(f"TRACE model._ensure_derived: Derived {len(self._properties)} properties, "
                           f"{len(self._fields)} fields, {len(self._methods)} methods for {self.full_name}")

    # ----- array shape -----

    @property
    def element_type(self) -> Optional['TypeDescriptor']:
        return self._element_type

    @property
    def rank(self) -> int:
        return self._rank

    def make_array(self, rank: int = 1) -> 'TypeDescriptor':
        """Return the interned array type of this element type and rank."""
        if rank < 1:
            raise _construct_model_error(ModelDefect(
                operation='make_array', subject_repr=_describe(self),
                arguments=(f"rank={rank}",), message="rank must be at least 1",
            ))
        array = self._arrays.get(rank)
        if array is not None:
            return array
        with _model_lock:
            array = self._arrays.get(rank)
            if array is None:
                suffix = '[' + ',' * (rank - 1) + ']'
                array = TypeDescriptor(self.name + suffix, self.namespace, TypeKind.ARRAY, is_sealed=True)
                array._element_type = self
                array._rank = rank
                self._arrays[rank] = array
        return array

    # ----- relationships -----

    @property
    def base_type(self) -> Optional['TypeDescriptor']:
        if self.is_array:
            return TypeDescriptor.array_base_type
        self._ensure_derived()
        return self._base_type

    @property
    def interfaces(self) -> Tuple['TypeDescriptor', ...]:
        """Directly implemented (or, for interfaces, directly extended) interfaces."""
        if self.is_array:
            definition = TypeDescriptor.array_interface_definition
            if self._rank == 1 and definition is not None:
                return (definition.make_generic(self._element_type),)
            return ()
        self._ensure_derived()
        return tuple(self._interfaces)

    def iter_base_chain(self, include_self: bool = True) -> Iterator['TypeDescriptor']:
        current = self if include_self else self.base_type
        while current is not None:
            yield current
            current = current.base_type

    def get_interfaces(self) -> Tuple['TypeDescriptor', ...]:
        """The transitive interface set, breadth first, each interface once."""
        ordered: List['TypeDescriptor'] = []
        seen = set()
        worklist: Deque['TypeDescriptor'] = collections.deque()
        for owner in self.iter_base_chain():
            worklist.extend(owner.interfaces)
        while worklist:
            current = worklist.popleft()
            if current in seen:
                continue
            seen.add(current)
            ordered.append(current)
            worklist.extend(current.interfaces)
        return tuple(ordered)

    def is_assignable_from(self, other: Optional['TypeDescriptor']) -> bool:
        """Native assignability: can a value of ``other`` be stored as ``self``."""
        if other is None:
            return False
        if other is self:
            return True
        if self.is_interface:
            return self in other.get_interfaces()
        if self.is_array and other.is_array:
            if self.rank != other.rank:
                return False
            if other.element_type.is_value_type or self.element_type.is_value_type:
                return self.element_type is other.element_type
            return self.element_type.is_assignable_from(other.element_type)
        return any(ancestor is self for ancestor in other.iter_base_chain(include_self=False))

    # ----- declared members -----

    @property
    def declared_properties(self) -> Tuple[PropertyDescriptor, ...]:
        self._ensure_derived()
        return tuple(self._properties)

    @property
    def declared_fields(self) -> Tuple[FieldDescriptor, ...]:
        self._ensure_derived()
        return tuple(self._fields)

    @property
    def declared_methods(self) -> Tuple[MethodDescriptor, ...]:
        self._ensure_derived()
        return tuple(self._methods)

    def get_declared_property(self, name: str) -> Optional[PropertyDescriptor]:
        for prop in self.declared_properties:
            if prop.name == name and not prop.is_indexer:
                return prop
        return None

    # ----- declaration (universe owners only) -----

    def _check_declarable(self, operation: str) -> None:
        if self._definition is not None or self.is_array or self.is_generic_parameter:
            raise _construct_model_error(ModelDefect(
                operation=operation, subject_repr=_describe(self),
                message="members can only be declared on non-derived types",
            ))

    def inherit(self, base_type: 'TypeDescriptor') -> 'TypeDescriptor':
        """Set the base type once the type's own generic parameters exist.

        ``Order`1 : Entity`1[T]`` can only name ``T`` after ``Order`1`` is built.
        """
        self._check_declarable('inherit')
        _require_type(base_type, 'inherit', self, 'base_type')
        self._base_type = base_type
        return self

    def implement(self, *interfaces: 'TypeDescriptor') -> 'TypeDescriptor':
        self._check_declarable('implement')
        for index, interface in enumerate(interfaces):
            _require_type(interface, 'implement', self, f"interfaces[{index}]")
        self._interfaces.extend(interfaces)
        return self

    def declare_property(self, name: str, value_type: 'TypeDescriptor',
                         getter: Optional[Accessibility] = Accessibility.PUBLIC,
                         setter: Optional[Accessibility] = None,
                         index_parameters: Sequence[ParameterSpec] = (),
                         is_static: bool = False, is_override: bool = False) -> PropertyDescriptor:
        self._check_declarable('declare_property')
        _require_type(value_type, 'declare_property', self, 'value_type')
        prop = PropertyDescriptor(name, self, value_type, getter=getter, setter=setter,
                                  index_parameters=index_parameters,
                                  is_static=is_static, is_override=is_override)
        self._properties.append(prop)
        return prop

    def declare_field(self, name: str, value_type: 'TypeDescriptor',
                      accessibility: Accessibility = Accessibility.PUBLIC,
                      is_static: bool = False) -> FieldDescriptor:
        self._check_declarable('declare_field')
        _require_type(value_type, 'declare_field', self, 'value_type')
        field = FieldDescriptor(name, self, value_type, accessibility=accessibility, is_static=is_static)
        self._fields.append(field)
        return field

    def declare_method(self, name: str, parameters: Sequence[ParameterSpec] = (),
                       return_type: Optional['TypeDescriptor'] = None,
                       accessibility: Accessibility = Accessibility.PUBLIC,
                       is_static: bool = False, is_special_name: bool = False,
                       is_virtual: bool = False, is_override: bool = False) -> MethodDescriptor:
        self._check_declarable('declare_method')
        method = MethodDescriptor(name, self, parameters=parameters, return_type=return_type,
                                  accessibility=accessibility, is_static=is_static,
                                  is_special_name=is_special_name,
                                  is_virtual=is_virtual, is_override=is_override)
        self._methods.append(method)
        return method

    def declare_constructor(self, parameters: Sequence[ParameterSpec] = (),
                            accessibility: Accessibility = Accessibility.PUBLIC) -> MethodDescriptor:
        self._check_declarable('declare_constructor')
        ctor = MethodDescriptor(CONSTRUCTOR_NAME, self, parameters=parameters,
                                accessibility=accessibility, is_special_name=True,
                                is_constructor=True)
        self._methods.append(ctor)
        return ctor

    def base_declaration(self) -> Optional['TypeDescriptor']:
        return self.base_type

class _GenericParameter(TypeDescriptor):
    """A type parameter of a generic definition, e.g. the ``T`` of ``List`1``."""

    def __init__(self, name: str, declaring_definition: TypeDescriptor, position: int):
        super().__init__(name, declaring_definition.namespace, TypeKind.GENERIC_PARAMETER)
        self.declaring_definition = declaring_definition
        self.position = position

    @property
    def full_name(self) -> str:
        return self.name

# ===== FUNCTIONS ===== #

def _substitute(tp: Optional[TypeDescriptor], bindings: Dict[TypeDescriptor, TypeDescriptor]) -> Optional[TypeDescriptor]:
    """Replace generic parameters in ``tp`` with their bound arguments."""
    if tp is None:
        return None
    bound = bindings.get(tp)
    if bound is not None:
        return bound
    if tp.is_constructed_generic:
        arguments = tuple(_substitute(a, bindings) for a in tp.generic_arguments)
        if all(new is old for new, old in zip(arguments, tp.generic_arguments)):
            return tp
        return tp.generic_definition.make_generic(*arguments)
    if tp.is_array:
        element = _substitute(tp.element_type, bindings)
        return tp if element is tp.element_type else element.make_array(tp.rank)
    if tp.is_generic_definition and all(p in bindings for p in tp.generic_arguments):
        # A definition naming itself, e.g. a Node`1 member typed Node`1
        return tp.make_generic(*(bindings[p] for p in tp.generic_arguments))
    return tp
