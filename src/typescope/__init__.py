# ===== MODULE DOCSTRING ===== #
"""
TypeScope: type and member introspection for structural equivalence.

TypeScope answers the structural questions an equivalence comparator asks
about a type, over an explicit type metadata model:

- Which members take part in a comparison?      -> build_catalog
- Does a type fit an open generic shape?         -> is_assignable_to_open_generic
- Which annotations apply to a type or member?   -> get_annotations / has_annotation
- Is it a tuple, record, anonymous type, ...?    -> typescope.classification
- Is there a conversion between two types?       -> find_conversion_operators
- What should a diagnostic call this type?       -> to_friendly_name

Usage:
    from typescope import runtime, build_catalog, to_friendly_name

    point = runtime.define_struct('Point', 'Geometry')
    point.declare_property('X', runtime.INT32)
    point.declare_property('Y', runtime.INT32)

    [m.name for m in build_catalog(point)]     # ['X', 'Y']
    to_friendly_name(point.make_array(2))      # 'Point[,]'
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Final, List

## ===== LOCAL ===== ##
from .logging import logger, set_verbosity
from .error_utils import ModelDefect, TypeModelError
from .model import (
    Accessibility, AccessorDescriptor, AnnotationRecord,
    FieldDescriptor, MemberDescriptor, MethodDescriptor,
    ParameterDescriptor, PropertyDescriptor, TypeDescriptor, TypeKind
)
from . import runtime
from .relationships import (
    get_closed_generic_interfaces, implements_open_generic,
    is_assignable_to_open_generic, is_derived_from_open_generic,
    is_equivalent_to, is_same_or_inherits, is_under_namespace
)
from .members import (
    MemberResolution, ResolutionStatus, build_catalog, clear_catalog_cache,
    find_field, find_methods, find_property, get_constructor,
    get_indexer_by_parameter_types, get_method, get_non_private_fields,
    get_non_private_members, get_non_private_properties,
    get_parameterless_method, get_property_by_name,
    has_explicitly_implemented_property, has_method,
    has_parameterless_method, is_indexer, resolve_field, resolve_property
)
from .annotations import (
    find_annotation_records, get_annotations, get_matching_attributes,
    get_matching_or_inherited_attributes, has_annotation,
    is_decorated_with, is_decorated_with_or_inherit
)
from .classification import (
    has_value_semantics, is_anonymous, is_declared_abstract,
    is_declared_sealed, is_declared_static, is_key_value_pair, is_record,
    is_tuple_like, nullable_or_actual_type, overrides_equals
)
from .conversions import (
    ConversionKind, find_conversion_operators,
    get_explicit_conversion_operator, get_implicit_conversion_operator
)
from .naming import to_friendly_name

# ===== GLOBALS ===== #

__version__: Final[str] = '0.1.0'

# ===== FUNCTIONS ===== #

def clear_caches() -> None:
    """Empty every memo cache in the package.

    Only needed by universe owners that keep declaring members after the
    first queries ran, and by tests.
    """
    clear_catalog_cache()
    to_friendly_name.cache_clear()

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    # Logging & errors
    'logger', 'set_verbosity', 'ModelDefect', 'TypeModelError',
    # Model
    'Accessibility', 'AccessorDescriptor', 'AnnotationRecord', 'FieldDescriptor',
    'MemberDescriptor', 'MethodDescriptor', 'ParameterDescriptor',
    'PropertyDescriptor', 'TypeDescriptor', 'TypeKind', 'runtime',
    # Relationships
    'get_closed_generic_interfaces', 'implements_open_generic',
    'is_assignable_to_open_generic', 'is_derived_from_open_generic',
    'is_equivalent_to', 'is_same_or_inherits', 'is_under_namespace',
    # Members
    'MemberResolution', 'ResolutionStatus', 'build_catalog', 'find_field',
    'find_methods', 'find_property', 'get_constructor',
    'get_indexer_by_parameter_types', 'get_method', 'get_non_private_fields',
    'get_non_private_members', 'get_non_private_properties',
    'get_parameterless_method', 'get_property_by_name',
    'has_explicitly_implemented_property', 'has_method',
    'has_parameterless_method', 'is_indexer', 'resolve_field', 'resolve_property',
    # Annotations
    'find_annotation_records', 'get_annotations', 'get_matching_attributes',
    'get_matching_or_inherited_attributes', 'has_annotation',
    'is_decorated_with', 'is_decorated_with_or_inherit',
    # Classification
    'has_value_semantics', 'is_anonymous', 'is_declared_abstract',
    'is_declared_sealed', 'is_declared_static', 'is_key_value_pair', 'is_record',
    'is_tuple_like', 'nullable_or_actual_type', 'overrides_equals',
    # Conversions & naming
    'ConversionKind', 'find_conversion_operators',
    'get_explicit_conversion_operator', 'get_implicit_conversion_operator',
    'to_friendly_name',
    'clear_caches',
]
