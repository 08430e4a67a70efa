"""
bitsetium — Composable and hierarchical bitsets
===============================================

Fixed-capacity bitsets that compose lazily and nest hierarchically.

Core modules
------------
errors
    Exception hierarchy with stable ``BITS-NNNN`` codes.
search
    The find-first-set protocol, its combinators and a contract checker.
ops
    ``BitSetLike`` protocol and the ``BitSetOps`` base class.
primitive
    Leaf bitsets: single words and arrays of words.
complement, union, intersection, difference
    Lazy set-algebra wrappers with simplifying rewrite rules.
option
    ``OptionalSlot``, a lazily allocated segment holder.
layered
    Two-tier hierarchical bitset with an occupancy summary.
capacities
    Pre-named capacities ``Bits1`` … ``Bits67108864``.
config
    ``EvalConfig`` settings for expression evaluation.

Addon modules
-------------
sexpr
    S-expression set-expression language (needs ``sexpdata``).

Quick start
-----------
>>> from bitsetium import Bits8, Bits256
>>> a = Bits8.from_indices([1, 3])
>>> b = Bits8.from_indices([2, 3])
>>> (a | b).find_first_set(0)
1
>>> big = Bits256.empty()
>>> big.set(200)
>>> big.segments_in_use()
[25]
"""

from __future__ import annotations

import importlib
import logging
import sys
import warnings
from typing import Any, Dict, List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.2.0"
__author__ = "bitsetium contributors"
__license__ = "MIT"
__all__: List[str] = []          # populated incrementally below

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal registry: (module_name, list_of_names_to_import)
#
#   CORE:  always imported; failure is fatal
#   ADDON: imported eagerly; failure only warns
# ---------------------------------------------------------------------------

_CORE_MODULES = {
    "errors": [
        "ErrorCode",
        "BitsetError",
        "IndexOutOfBoundsError",
        "UnsupportedOperationError",
        "ConfigurationError",
        "ExpressionError",
    ],
    "search": [
        "MAX_INDEX",
        "find_set_in_range",
        "iter_set",
        "check_search_contract",
        "SearchViolation",
    ],
    "ops": [
        "BitSetLike",
        "BitSetOps",
        # complement/union/intersection/difference stay in bitsetium.ops;
        # those names are the wrapper submodules at package level
        "is_subset_of",
        "is_disjoint",
    ],
    "primitive": [
        "Word",
        "WordArray",
        "word_type",
        "word_array_type",
        "Bit",
        "Bits1",
        "Bits8",
        "Bits16",
        "Bits32",
        "Bits64",
        "Bits128",
    ],
    "complement": ["Complement"],
    "union": ["Union"],
    "intersection": ["Intersection"],
    "difference": ["Difference"],
    "option": ["OptionalSlot", "optional_type"],
    "layered": ["Layered", "layered_type"],
    "capacities": [
        "Bits256",
        "Bits512",
        "Bits1024",
        "Bits2048",
        "Bits4096",
        "Bits8192",
        "Bits16384",
        "Bits32768",
        "Bits65536",
        "Bits131072",
        "Bits262144",
        "Bits524288",
        "Bits1048576",
        "Bits2097152",
        "Bits4194304",
        "Bits8388608",
        "Bits16777216",
        "Bits33554432",
        "Bits67108864",
        "CAPACITIES",
        "capacity_type",
    ],
    "config": ["EvalConfig"],
}

_ADDON_MODULES = {
    "sexpr": [
        "parse_expression",
        "evaluate",
    ],
}

# ---------------------------------------------------------------------------
# Import helper
# ---------------------------------------------------------------------------

def _import_names(
    module_rel_name: str,
    names: List[str],
    *,
    fatal: bool = True,
) -> None:
    """Import *names* from a submodule and bind them in the package namespace.

    Parameters
    ----------
    module_rel_name:
        Module name relative to this package (e.g. ``"layered"``).
    names:
        Public symbols to re-export.
    fatal:
        If ``True``, an ``ImportError`` propagates.  If ``False``, a warning
        is issued and the names are skipped (addon tier).
    """
    fq_name = f"{__name__}.{module_rel_name}"
    try:
        mod = importlib.import_module(fq_name)
    except ImportError as exc:
        if fatal:
            raise ImportError(
                f"bitsetium: required submodule '{module_rel_name}' "
                f"failed to import: {exc}"
            ) from exc
        warnings.warn(
            f"bitsetium: optional submodule '{module_rel_name}' "
            f"could not be imported ({exc}); related symbols will be unavailable.",
            ImportWarning,
            stacklevel=2,
        )
        _log.warning("Skipped optional module %s: %s", module_rel_name, exc)
        return

    current_module = sys.modules[__name__]
    for name in names:
        if not hasattr(mod, name):
            msg = f"bitsetium.{module_rel_name} does not export '{name}'"
            if fatal:
                raise AttributeError(msg)
            _log.warning(msg)
            continue
        setattr(current_module, name, getattr(mod, name))
        __all__.append(name)


for _mod, _names in _CORE_MODULES.items():
    _import_names(_mod, _names, fatal=True)

for _mod, _names in _ADDON_MODULES.items():
    _import_names(_mod, _names, fatal=False)

del _mod, _names

# ---------------------------------------------------------------------------
# Package-level utilities
# ---------------------------------------------------------------------------

def list_submodules() -> List[str]:
    """Return the names of all submodules in the package (core + addon)."""
    return sorted(set(_CORE_MODULES) | set(_ADDON_MODULES))


def package_info() -> Dict[str, Any]:
    """Version and submodule load status, for diagnostics."""
    from bitsetium.capacities import CAPACITIES

    loaded = []
    missing = []
    for mod_name in list_submodules():
        if f"{__name__}.{mod_name}" in sys.modules:
            loaded.append(mod_name)
        else:
            missing.append(mod_name)
    return {
        "version": __version__,
        "loaded_modules": loaded,
        "missing_modules": missing,
        "capacities": sorted(CAPACITIES),
    }


__all__ += ["list_submodules", "package_info"]
