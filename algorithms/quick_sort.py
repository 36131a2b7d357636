"""
quick_sort.py — Quick Sort
===========================
Bucket-partition quick sort over index ranges [lo, hi) of one buffer.

  1. Pivot = last element of the range
  2. Compare every other element with the pivot   →  COMPARE (i, pivot)
     `<` goes to the low bucket, ties and larger go to the high bucket
  3. Lay out low + [pivot] + high in [lo, hi)      →  OVERWRITE per slot
  4. Recurse into the low range, then the high range
  5. Copy the sorted run back into [lo, hi)        →  OVERWRITE per slot

Every OVERWRITE carries overlay["range"] = (lo, hi) and overlay["buffer"],
the run being written.  Step 3 puts each bucket into its own index range so
the recursive calls can sort it in place; step 5 is the concatenation of the
sorted buckets around the pivot.
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepEmitter


PSEUDOCODE: List[str] = [
    "def quick_sort(A, lo, hi):",                                      # 0
    "    if hi - lo ≤ 1: return",                                      # 1
    "    pivot ← A[hi - 1]",                                           # 2
    "    for i from lo to hi - 2:",                                    # 3
    "        if A[i] < pivot: low.append(A[i]) else high.append(A[i])",  # 4
    "    A[lo:hi] ← low + [pivot] + high",                             # 5
    "    quick_sort(A, lo, lo + len(low))",                            # 6
    "    quick_sort(A, lo + len(low) + 1, hi)",                        # 7
    "    A[lo:hi] ← sorted(low) + [pivot] + sorted(high)",             # 8
]


def quick_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """
    Yields Step snapshots for every pivot comparison, partition write and
    copy-back.

    Raises:
        InvalidInput – immediately, if `values` is not a numeric sequence.
    """
    em = StepEmitter(values)
    return _run(em)


def _run(em: StepEmitter) -> Generator[Step, None, None]:
    yield from _quick_sort(em, 0, len(em))
    yield em.complete(line=0)


def _quick_sort(em: StepEmitter, lo: int, hi: int) -> Generator[Step, None, None]:
    if hi - lo <= 1:
        return

    p = hi - 1
    pivot = em[p]
    low:  List[int] = []
    high: List[int] = []

    for i in range(lo, p):
        yield em.compare(
            i, p, line=4,
            explanation=f"Is {em[i]} less than the pivot {pivot}?",
        )
        if em[i] < pivot:
            low.append(em[i])
        else:
            high.append(em[i])

    buffer = tuple(low + [pivot] + high)
    for k, v in enumerate(buffer):
        yield em.overwrite(
            lo + k, v, line=5, range=(lo, hi), buffer=buffer,
            explanation=f"Partition [{lo}, {hi}): write {v} to position {lo + k}.",
        )

    split = lo + len(low)
    yield from _quick_sort(em, lo, split)
    yield from _quick_sort(em, split + 1, hi)

    merged = tuple(em.slice(lo, split) + [pivot] + em.slice(split + 1, hi))
    for k, v in enumerate(merged):
        yield em.overwrite(
            lo + k, v, line=8, range=(lo, hi), buffer=merged,
            explanation=f"Copy back [{lo}, {hi}): write {v} to position {lo + k}.",
        )
