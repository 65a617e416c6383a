# ===== MODULE DOCSTRING ===== #
"""
Annotation queries for TypeScope.

Annotations are opaque: this module finds them, it never interprets them.
A query names an annotation class; every record whose key is that class or
a subclass of it matches.

With ``inherited=False`` only the subject's own declarations are searched.
With ``inherited=True`` the search continues up the subject's ancestry:
- types: the base chain (interfaces do not pass annotations on)
- properties and methods: the chain of declarations they override
- fields and accessors: no ancestry, so both modes agree

Ancestors only contribute records marked ``inheritable``; those come back
with ``inherited=True`` so callers can tell where a record was declared.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    Callable, Iterator, Optional,
    Union, Final, List, Any
)
import logging

## ===== LOCAL ===== ##
from .model import (
    AccessorDescriptor, AnnotationRecord, MemberDescriptor,
    MethodDescriptor, TypeDescriptor
)
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'find_annotation_records',
    'get_annotations',
    'get_matching_attributes',
    'get_matching_or_inherited_attributes',
    'has_annotation',
    'is_decorated_with',
    'is_decorated_with_or_inherit',
]

## ===== TYPE ALIASES ===== ##
AnnotationSubject = Union[TypeDescriptor, MemberDescriptor, MethodDescriptor, AccessorDescriptor]
AnnotationPredicate = Callable[[Any], bool]

# ===== FUNCTIONS ===== #

## ===== CORE QUERY ===== ##
def _iter_records(subject: AnnotationSubject, inherited: bool) -> Iterator[AnnotationRecord]:
    yield from subject.annotations
    if not inherited:
        return
    ancestor = subject.base_declaration()
    while ancestor is not None:
        for record in ancestor.annotations:
            if record.inheritable:
                yield record.as_inherited()
        ancestor = ancestor.base_declaration()

def find_annotation_records(subject: AnnotationSubject, annotation_type: type,
                            predicate: Optional[AnnotationPredicate] = None,
                            inherited: bool = False) -> List[AnnotationRecord]:
    """Find the annotation records of ``annotation_type`` that apply to ``subject``.

    Args:
        subject: A type, member, method or accessor descriptor.
        annotation_type: The annotation class to look for. Subclasses match.
        predicate: Optional test over the annotation payload. Records whose
            payload fails it are dropped.
        inherited: Whether to include records declared on ancestors.

    Returns:
        Matching records, own declarations first. Empty when nothing matches.
    """
    matches = [
        record for record in _iter_records(subject, inherited)
        if issubclass(record.key, annotation_type)
        and (predicate is None or predicate(record.payload))
    ]
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE annotations.find_annotation_records: {subject!r} / {annotation_type.__name__} "
                   f"(inherited={inherited}) -> {len(matches)} match(es)")
    return matches

def get_annotations(subject: AnnotationSubject, annotation_type: type,
                    predicate: Optional[AnnotationPredicate] = None,
                    inherited: bool = False) -> List[Any]:
    """The payloads of the matching annotations. See ``find_annotation_records``."""
    return [record.payload for record in find_annotation_records(subject, annotation_type, predicate, inherited)]

def has_annotation(subject: AnnotationSubject, annotation_type: type,
                   predicate: Optional[AnnotationPredicate] = None,
                   inherited: bool = False) -> bool:
    """Whether at least one matching annotation applies to ``subject``."""
    return len(find_annotation_records(subject, annotation_type, predicate, inherited)) != 0

## ===== NAMED SHORTHANDS ===== ##
def is_decorated_with(subject: AnnotationSubject, annotation_type: type,
                      predicate: Optional[AnnotationPredicate] = None) -> bool:
    return has_annotation(subject, annotation_type, predicate, inherited=False)

def is_decorated_with_or_inherit(subject: AnnotationSubject, annotation_type: type,
                                 predicate: Optional[AnnotationPredicate] = None) -> bool:
    return has_annotation(subject, annotation_type, predicate, inherited=True)

def get_matching_attributes(subject: AnnotationSubject, annotation_type: type,
                            predicate: Optional[AnnotationPredicate] = None) -> List[Any]:
    return get_annotations(subject, annotation_type, predicate, inherited=False)

def get_matching_or_inherited_attributes(subject: AnnotationSubject, annotation_type: type,
                                         predicate: Optional[AnnotationPredicate] = None) -> List[Any]:
    return get_annotations(subject, annotation_type, predicate, inherited=True)
