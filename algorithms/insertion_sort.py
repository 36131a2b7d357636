"""
insertion_sort.py — Insertion Sort
===================================
Generator-based insertion sort.  For every key A[i] (i ≥ 1):
  1. Check the left neighbour against the key       →  COMPARE (j, j+1)
  2. Shift the neighbour one slot right             →  OVERWRITE j+1
  3. Drop the key into the hole                     →  OVERWRITE j+1
and finally a COMPLETE step.

Every key gets its placement write, even one that is already in place.
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepEmitter


PSEUDOCODE: List[str] = [
    "def insertion_sort(A):",              # 0
    "    for i from 1 to n - 1:",          # 1
    "        key ← A[i]",                  # 2
    "        j ← i - 1",                   # 3
    "        while j ≥ 0 and A[j] > key:", # 4
    "            A[j + 1] ← A[j]",         # 5
    "            j ← j - 1",               # 6
    "        A[j + 1] ← key",              # 7
]


def insertion_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every shift check, shift and placement.

    Raises:
        InvalidInput – immediately, if `values` is not a numeric sequence.
    """
    em = StepEmitter(values)
    return _insertion_sort(em)


def _insertion_sort(em: StepEmitter) -> Generator[Step, None, None]:
    for i in range(1, len(em)):
        key = em[i]
        j = i - 1

        while j >= 0:
            yield em.compare(
                j, j + 1, line=4,
                explanation=f"Is {em[j]} greater than the key {key}?",
            )
            if not em[j] > key:
                break
            yield em.overwrite(
                j + 1, em[j], line=5,
                explanation=f"Shift {em[j]} one place right.",
            )
            j -= 1

        yield em.overwrite(
            j + 1, key, line=7,
            explanation=f"Insert the key {key} at position {j + 1}.",
        )

    yield em.complete(line=1)
