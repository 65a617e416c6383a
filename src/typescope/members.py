# ===== MODULE DOCSTRING ===== #
"""
Member catalog building for TypeScope.

This module decides which members of a type take part in a structural
comparison, and offers the name and signature lookups the comparator uses
when it has to match a member of one type against another.

Catalog rules:
- Only instance properties and fields count. Indexers never do.
- A property counts only when its getter exists and the getter itself is
  public or protected, whatever the property's overall visibility.
- Class and struct members are collected along the base chain; a member
  redeclared in a derived type hides the ancestor's declaration.
- Interface members are collected by a breadth-first walk over the
  interface graph that visits every interface once, even in diamonds. Each
  level's new members are layered in front of what was collected before.
- Member names are unique within a catalog; the first discovery wins.

Catalogs are memoized per type and filter. The cache is populated once and
read many times, guarded the same way as every other cache in the package.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    Callable, Iterable, Iterator,
    Optional, Sequence, FrozenSet,
    Final, Tuple, Dict, List
)
import collections
import dataclasses
import threading
import logging
import enum

## ===== LOCAL ===== ##
from .config import GETTER_PREFIX, SETTER_PREFIX
from .model import (
    Accessibility, FieldDescriptor, MemberDescriptor,
    MethodDescriptor, PropertyDescriptor, TypeDescriptor
)
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'MemberResolution',
    'ResolutionStatus',
    'build_catalog',
    'clear_catalog_cache',
    'find_field',
    'find_methods',
    'find_property',
    'get_constructor',
    'get_indexer_by_parameter_types',
    'get_method',
    'get_non_private_fields',
    'get_non_private_members',
    'get_non_private_properties',
    'get_parameterless_method',
    'get_property_by_name',
    'has_explicitly_implemented_property',
    'has_method',
    'has_parameterless_method',
    'is_indexer',
    'resolve_field',
    'resolve_property',
]

## ===== CATALOG CACHE ===== ##
# Maps (type, kind, name filter) -> tuple of members
_CatalogKey = Tuple[TypeDescriptor, str, Optional[FrozenSet[str]]]
_catalog_cache: Dict[_CatalogKey, Tuple[MemberDescriptor, ...]] = {}
_catalog_cache_lock = threading.Lock()

# ===== CLASSES ===== #

class ResolutionStatus(enum.Enum):
    FOUND = 'found'
    NOT_FOUND = 'not_found'
    AMBIGUOUS = 'ambiguous'

@dataclasses.dataclass(frozen=True)
class MemberResolution:
    """Outcome of a by-name member lookup.

    Keeps "nothing by that name" apart from "several candidates and none
    preferred", which the plain lookups both report as ``None``.

    Attributes:
        name (str): The requested member name.
        status (ResolutionStatus): Whether a single member was chosen.
        member (Optional[MemberDescriptor]): The chosen member when FOUND.
        candidates (Tuple[MemberDescriptor, ...]): Every member carrying the name.
    """
    name: str
    status: ResolutionStatus
    member: Optional[MemberDescriptor] = None
    candidates: Tuple[MemberDescriptor, ...] = ()

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND

# ===== FUNCTIONS ===== #

## ===== CACHE ===== ##
def _cached(key: _CatalogKey, compute: Callable[[], Tuple[MemberDescriptor, ...]]) -> Tuple[MemberDescriptor, ...]:
    """Return the cached catalog for ``key``, computing it on first use."""
    cached = _catalog_cache.get(key)
    if cached is not None:
        return cached
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE members._cached: Cache miss for {key[0].full_name} ({key[1]}).")
    # Computed outside the lock: catalogs are built from other cached catalogs
    result = compute()
    with _catalog_cache_lock:
        # First writer wins so every caller sees the same tuple
        return _catalog_cache.setdefault(key, result)

def clear_catalog_cache() -> None:
    with _catalog_cache_lock:
        _catalog_cache.clear()

## ===== ACCESSIBILITY ===== ##
def _has_non_private_getter(prop: PropertyDescriptor) -> bool:
    return prop.getter is not None and prop.getter.accessibility.is_reachable

def _is_comparable_property(prop: PropertyDescriptor) -> bool:
    return not prop.is_static and not prop.is_indexer and _has_non_private_getter(prop)

def _is_comparable_field(field: FieldDescriptor) -> bool:
    return not field.is_static and field.accessibility.is_reachable

## ===== HIERARCHY WALK ===== ##
def _members_from_hierarchy(tp: TypeDescriptor,
                            get_members: Callable[[TypeDescriptor], Iterable[MemberDescriptor]]) -> List[MemberDescriptor]:
    """Collect members along the type's hierarchy, one member per name."""
    collected: List[MemberDescriptor] = []
    names = set()

    if not tp.is_interface:
        for owner in tp.iter_base_chain():
            for member in get_members(owner):
                if member.name not in names:
                    names.add(member.name)
                    collected.append(member)
        return collected

    considered = {tp}
    queue = collections.deque([tp])
    while queue:
        current = queue.popleft()
        for parent in current.interfaces:
            if parent in considered:
                continue
            considered.add(parent)
            queue.append(parent)

        fresh = []
        for member in get_members(current):
            if member.name not in names:
                names.add(member.name)
                fresh.append(member)
        collected[0:0] = fresh
        if _log.isEnabledFor(logging.DEBUG) and fresh:
            _log.debug(f"TRACE members._members_from_hierarchy: {current.full_name} contributed {[m.name for m in fresh]}")
    return collected

## ===== CATALOG ===== ##
def get_non_private_properties(tp: TypeDescriptor, name_filter: Optional[Iterable[str]] = None) -> Tuple[PropertyDescriptor, ...]:
    """Readable instance properties of ``tp`` and its ancestors, indexers excluded.

    Args:
        tp: The type to inspect.
        name_filter: When given, only properties with these names are kept.

    Returns:
        The properties in catalog order.
    """
    names = frozenset(name_filter) if name_filter is not None else None

    def compute() -> Tuple[PropertyDescriptor, ...]:
        found = _members_from_hierarchy(
            tp, lambda owner: [p for p in owner.declared_properties if _is_comparable_property(p)])
        return tuple(p for p in found if names is None or p.name in names)

    return _cached((tp, 'properties', names), compute)

def get_non_private_fields(tp: TypeDescriptor) -> Tuple[FieldDescriptor, ...]:
    """Public and protected instance fields of ``tp`` and its ancestors."""
    def compute() -> Tuple[FieldDescriptor, ...]:
        return tuple(_members_from_hierarchy(
            tp, lambda owner: [f for f in owner.declared_fields if _is_comparable_field(f)]))

    return _cached((tp, 'fields', None), compute)

def build_catalog(tp: TypeDescriptor, name_filter: Optional[Iterable[str]] = None) -> Tuple[MemberDescriptor, ...]:
    """Build the ordered set of members that take part in comparing ``tp``.

    Properties come first, then fields. A field sharing its name with an
    earlier property is dropped. ``name_filter`` restricts properties only.

    Args:
        tp: The type to inspect.
        name_filter: Optional property names to keep.

    Returns:
        A possibly empty tuple of members with unique names.
    """
    names = frozenset(name_filter) if name_filter is not None else None

    def compute() -> Tuple[MemberDescriptor, ...]:
        properties = get_non_private_properties(tp, names)
        taken = {p.name for p in properties}
        fields = [f for f in get_non_private_fields(tp) if f.name not in taken]
        catalog = tuple(properties) + tuple(fields)
        if _log.isEnabledFor(logging.DEBUG):
            _log.debug(f"TRACE members.build_catalog: {tp.full_name} -> {[m.name for m in catalog]}")
        return catalog

    return _cached((tp, 'catalog', names), compute)

def get_non_private_members(tp: TypeDescriptor) -> Tuple[MemberDescriptor, ...]:
    return build_catalog(tp)

## ===== NAME LOOKUPS ===== ##
def _all_instance_members(tp: TypeDescriptor, declared: Callable[[TypeDescriptor], Sequence[MemberDescriptor]]) -> List[MemberDescriptor]:
    """Instance members visible on ``tp``: everything it declares, plus non-private inherited ones."""
    result = []
    for owner in tp.iter_base_chain():
        for member in declared(owner):
            if member.is_static:
                continue
            if owner is not tp and member.accessibility is Accessibility.PRIVATE:
                continue
            result.append(member)
    return result

def _resolve(name: str, candidates: Sequence[MemberDescriptor], preferred_type: Optional[TypeDescriptor]) -> MemberResolution:
    named = tuple(m for m in candidates if m.name == name)
    if not named:
        return MemberResolution(name, ResolutionStatus.NOT_FOUND)
    if len(named) == 1:
        return MemberResolution(name, ResolutionStatus.FOUND, named[0], named)
    preferred = [m for m in named if m.value_type is preferred_type]
    if len(preferred) == 1:
        return MemberResolution(name, ResolutionStatus.FOUND, preferred[0], named)
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE members._resolve: '{name}' is ambiguous among {len(named)} candidates, {len(preferred)} preferred")
    return MemberResolution(name, ResolutionStatus.AMBIGUOUS, None, named)

def resolve_property(tp: TypeDescriptor, name: str, preferred_type: Optional[TypeDescriptor] = None) -> MemberResolution:
    """Resolve a property by case-sensitive name, preferring ``preferred_type`` on clashes."""
    return _resolve(name, _all_instance_members(tp, lambda owner: owner.declared_properties), preferred_type)

def resolve_field(tp: TypeDescriptor, name: str, preferred_type: Optional[TypeDescriptor] = None) -> MemberResolution:
    """Resolve a field by case-sensitive name, preferring ``preferred_type`` on clashes."""
    return _resolve(name, _all_instance_members(tp, lambda owner: owner.declared_fields), preferred_type)

def find_property(tp: TypeDescriptor, name: str, preferred_type: Optional[TypeDescriptor] = None) -> Optional[PropertyDescriptor]:
    """Find a property by case-sensitive name.

    Returns:
        The property, or None if no property has that name or several do and
        not exactly one of them has ``preferred_type``.
    """
    return resolve_property(tp, name, preferred_type).member

def find_field(tp: TypeDescriptor, name: str, preferred_type: Optional[TypeDescriptor] = None) -> Optional[FieldDescriptor]:
    """Find a field by case-sensitive name. See ``find_property``."""
    return resolve_field(tp, name, preferred_type).member

def get_property_by_name(tp: TypeDescriptor, name: str) -> Optional[PropertyDescriptor]:
    """Any property named ``name``, static or instance, of any visibility."""
    for owner in tp.iter_base_chain():
        for prop in owner.declared_properties:
            if prop.name == name and not prop.is_indexer:
                return prop
    return None

## ===== INDEXERS ===== ##
def is_indexer(prop: PropertyDescriptor) -> bool:
    return prop.is_indexer

def get_indexer_by_parameter_types(tp: TypeDescriptor, parameter_types: Sequence[TypeDescriptor]) -> Optional[PropertyDescriptor]:
    """The indexer whose index parameters are exactly ``parameter_types``."""
    wanted = tuple(parameter_types)
    for owner in tp.iter_base_chain():
        for prop in owner.declared_properties:
            if prop.is_indexer and prop.index_parameter_types == wanted:
                return prop
    return None

## ===== METHODS ===== ##
def _iter_methods(tp: TypeDescriptor, public_only: bool = False) -> Iterator[MethodDescriptor]:
    """Methods visible on ``tp``, most derived first, one per signature."""
    seen = set()
    for owner in tp.iter_base_chain():
        for method in owner.declared_methods:
            if method.is_constructor:
                continue
            if public_only and not method.is_public:
                continue
            if owner is not tp and (method.accessibility is Accessibility.PRIVATE or method.is_static):
                continue
            signature = (method.name, method.parameter_types)
            if signature in seen:
                continue
            seen.add(signature)
            yield method

def get_method(tp: TypeDescriptor, name: str, parameter_types: Sequence[TypeDescriptor],
               public_only: bool = False) -> Optional[MethodDescriptor]:
    """The method called ``name`` whose parameter types are exactly ``parameter_types``."""
    wanted = tuple(parameter_types)
    for method in _iter_methods(tp, public_only=public_only):
        if method.name == name and method.parameter_types == wanted:
            return method
    return None

def has_method(tp: TypeDescriptor, name: str, parameter_types: Sequence[TypeDescriptor]) -> bool:
    return get_method(tp, name, parameter_types) is not None

def get_parameterless_method(tp: TypeDescriptor, name: str) -> Optional[MethodDescriptor]:
    return get_method(tp, name, ())

def has_parameterless_method(tp: TypeDescriptor, name: str) -> bool:
    return get_parameterless_method(tp, name) is not None

def get_constructor(tp: TypeDescriptor, parameter_types: Sequence[TypeDescriptor]) -> Optional[MethodDescriptor]:
    """A constructor declared on ``tp`` taking exactly ``parameter_types``."""
    wanted = tuple(parameter_types)
    for method in tp.declared_methods:
        if method.is_constructor and method.parameter_types == wanted:
            return method
    return None

def has_explicitly_implemented_property(tp: TypeDescriptor, interface: TypeDescriptor, name: str) -> bool:
    """Whether ``tp`` implements ``interface``'s property ``name`` explicitly.

    Explicit implementations are compiled to accessors named after the
    interface, e.g. ``App.IShape.get_Area``.
    """
    getter_name = f"{interface.full_name}.{GETTER_PREFIX}{name}"
    setter_name = f"{interface.full_name}.{SETTER_PREFIX}{name}"
    if has_parameterless_method(tp, getter_name):
        return True
    return any(m.name == setter_name and len(m.parameters) == 1 for m in _iter_methods(tp))

def find_methods(tp: TypeDescriptor, name: str, public_only: bool = False) -> Tuple[MethodDescriptor, ...]:
    """Every overload called ``name`` visible on ``tp``, whatever its parameters."""
    return tuple(m for m in _iter_methods(tp, public_only=public_only) if m.name == name)
