"""
heap_sort.py — Heap Sort
=========================
Generator-based heap sort.  Yields a Step at every meaningful event:
  1. Compare a child against the current largest  →  COMPARE
  2. Move the larger child up during sift-down     →  SWAP
  3. Move the root behind the shrinking heap       →  SWAP
  4. Final step                                    →  COMPLETE

Pseudocode lines are 0-indexed and match the PSEUDOCODE constant
exported alongside the generator so the UI can highlight them live.
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepEmitter


PSEUDOCODE: List[str] = [
    "def heap_sort(A):",                                        # 0
    "    n ← len(A)",                                           # 1
    "    for i from n/2 - 1 down to 0:",                        # 2
    "        heapify(A, n, i)",                                 # 3
    "    for end from n - 1 down to 1:",                        # 4
    "        swap(A[0], A[end])",                               # 5
    "        heapify(A, end, 0)",                               # 6
    "def heapify(A, n, i):",                                    # 7
    "    largest ← i",                                          # 8
    "    if left < n and A[left] > A[largest]: largest ← left", # 9
    "    if right < n and A[right] > A[largest]: largest ← right",  # 10
    "    if largest ≠ i:",                                      # 11
    "        swap(A[i], A[largest]); heapify(A, n, largest)",   # 12
]


def heap_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every compare / swap of heap sort.

    Args:
        values : The input Sequence.  It is copied; the caller's list is untouched.

    Raises:
        InvalidInput – immediately, if `values` is not a numeric sequence.
    """
    em = StepEmitter(values)
    return _heap_sort(em)


def _heap_sort(em: StepEmitter) -> Generator[Step, None, None]:
    n = len(em)

    # build a max-heap bottom-up
    for i in range(n // 2 - 1, -1, -1):
        yield from _heapify(em, n, i)

    # extract the max one by one
    for end in range(n - 1, 0, -1):
        yield em.swap(
            0, end, line=5, heap_size=end,
            explanation=f"Move the max ({em[0]}) to position {end}; the heap shrinks to {end}.",
        )
        yield from _heapify(em, end, 0)

    yield em.complete(line=4)


def _heapify(em: StepEmitter, n: int, i: int) -> Generator[Step, None, None]:
    """Sift A[i] down inside the heap A[0:n]."""
    while True:
        largest = i
        left, right = 2 * i + 1, 2 * i + 2

        if left < n:
            yield em.compare(
                left, largest, line=9, heap_size=n,
                explanation=f"Is the left child {em[left]} larger than {em[largest]}?",
            )
            if em[left] > em[largest]:
                largest = left

        if right < n:
            yield em.compare(
                right, largest, line=10, heap_size=n,
                explanation=f"Is the right child {em[right]} larger than {em[largest]}?",
            )
            if em[right] > em[largest]:
                largest = right

        if largest == i:
            return

        yield em.swap(
            i, largest, line=12, heap_size=n,
            explanation=f"Swap {em[i]} with its larger child {em[largest]}.",
        )
        i = largest
