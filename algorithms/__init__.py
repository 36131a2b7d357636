"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "heap": AlgoInfo(key, label, fn, pseudocode, …),
        …
    }

Every `fn` takes the input Sequence and returns a generator of Steps.
Adding an algorithm is: write the generator, add one entry here.
"""

from dataclasses import dataclass
from typing import Callable, List, Dict, Optional

from errors import InvalidConfiguration
from algorithms.heap_sort      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc
from algorithms.insertion_sort import insertion_sort as _insertion, PSEUDOCODE as _ins_pc
from algorithms.merge_sort     import merge_sort     as _merge,     PSEUDOCODE as _merge_pc
from algorithms.quick_sort     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "heap"
    label:             str                    # human label, e.g. "Heap Sort"
    fn:                Callable               # values -> Generator[Step]
    pseudocode:        List[str]              # lines for the side-panel
    complexity_time:   str      = ""          # e.g. "O(n log n)"
    complexity_space:  str      = ""          # e.g. "O(1)"
    in_place:          bool     = True        # writes only within the Sequence?
    description:       str      = ""          # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a max-heap, then repeatedly moves the root behind the heap.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_ins_pc,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Shifts larger neighbours right until each key drops into place.",
    ),

    "merge": AlgoInfo(
        key="merge", label="Merge Sort", fn=_merge, pseudocode=_merge_pc,
        complexity_time="O(n log n)", complexity_space="O(n)", in_place=False,
        description="Sorts both halves, merges them, copies the run back slot by slot.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(n)", in_place=False,
        description="Splits around the last element into low / high buckets and recurses.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def normalise_key(name: str) -> str:
    """'Heap Sort', 'heap_sort', 'Heap' → 'heap'."""
    key = name.strip().lower().replace("-", " ").replace("_", " ")
    if key.endswith(" sort"):
        key = key[: -len(" sort")]
    return key.strip()


def get_algorithm(name: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key or label, or None."""
    if not isinstance(name, str):
        return None
    return REGISTRY.get(normalise_key(name))


def resolve_algorithm(name: str) -> AlgoInfo:
    """Like get_algorithm, but an unknown name is a configuration error."""
    info = get_algorithm(name)
    if info is None:
        known = ", ".join(a.label for a in REGISTRY.values())
        raise InvalidConfiguration(f"Unknown algorithm: {name!r} (expected one of {known})")
    return info


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "resolve_algorithm",
    "list_algorithms",
    "normalise_key",
]
