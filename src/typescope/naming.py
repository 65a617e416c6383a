# ===== MODULE DOCSTRING ===== #
"""
Display names for TypeScope diagnostics.

``to_friendly_name`` renders a type the way a developer would write it:
primitive keywords (``int``, ``string``), arrays with their rank
(``int[,]``), nullable wrappers with a question mark (``int?``) and
generics with their arguments (``Dictionary<string, int>``).
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from functools import lru_cache
from typing import Final, List
import logging

## ===== LOCAL ===== ##
from .config import FRIENDLY_NAME_CACHE_SIZE, GENERIC_ARITY_SEPARATOR
from .model import TypeDescriptor
from .logging import _log
from . import runtime

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = ['to_friendly_name']

# ===== FUNCTIONS ===== #

@lru_cache(maxsize=FRIENDLY_NAME_CACHE_SIZE)
def to_friendly_name(tp: TypeDescriptor) -> str:
    """Format a type descriptor into a readable name.

    Args:
        tp: The type to name.

    Returns:
        The display name, e.g. ``"Pair<int, string>"``.
    """
    alias = runtime.PRIMITIVE_ALIASES.get(tp)
    if alias is not None:
        return alias

    if tp.is_array:
        commas = ',' * (tp.rank - 1)
        return f"{to_friendly_name(tp.element_type)}[{commas}]"

    if tp.is_generic and tp.generic_definition is runtime.NULLABLE:
        return f"{to_friendly_name(tp.generic_arguments[0])}?"

    if tp.is_generic:
        base_name = tp.name.split(GENERIC_ARITY_SEPARATOR)[0]
        arguments = ', '.join(to_friendly_name(a) for a in tp.generic_arguments)
        result = f"{base_name}<{arguments}>"
        if _log.isEnabledFor(logging.DEBUG):
            _log.debug(f"TRACE naming.to_friendly_name: Formatted generic {tp.full_name} -> '{result}'")
        return result

    return tp.name
