# ===== MODULE DOCSTRING ===== #
"""Constants shared across the TypeScope package.

Name tokens used by the classifier, the member lookups and the conversion
operator locator live here so every module matches the same spelling.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Final, FrozenSet, Tuple
import logging

# ===== GLOBALS ===== #

## ===== LOGGING ===== ##
LOGGER_NAME: Final[str] = 'typescope'
LOG_FORMAT: Final[str] = '%(levelname)s:%(name)s: %(message)s'
# Levels accepted by typescope.logging.set_verbosity
VALID_LEVELS: Final[Tuple[int, ...]] = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)

## ===== CACHES ===== ##
FRIENDLY_NAME_CACHE_SIZE: Final[int] = 1024

## ===== NAME TOKENS ===== ##
# Separator between a generic type's name and its arity, e.g. "List`1"
GENERIC_ARITY_SEPARATOR: Final[str] = '`'

# Compiler-emitted names
ANONYMOUS_TYPE_MARKER: Final[str] = 'AnonymousType'
CLONE_METHOD_NAME: Final[str] = '<Clone>$'
EQUALITY_CONTRACT_NAME: Final[str] = 'EqualityContract'
EQUALS_METHOD_NAME: Final[str] = 'Equals'
CONSTRUCTOR_NAME: Final[str] = '.ctor'

# Conversion operators
IMPLICIT_OPERATOR_NAME: Final[str] = 'op_Implicit'
EXPLICIT_OPERATOR_NAME: Final[str] = 'op_Explicit'

# Explicit interface implementations are named "<Interface.FullName>.get_<Property>"
GETTER_PREFIX: Final[str] = 'get_'
SETTER_PREFIX: Final[str] = 'set_'

## ===== TUPLE SHAPES ===== ##
# Arities at which a tuple shape stands on its own; the widest shape nests
# the remaining elements in its last slot.
TUPLE_ARITIES: Final[FrozenSet[int]] = frozenset(range(1, 8))
TUPLE_REST_ARITY: Final[int] = 8
