from __future__ import annotations
from typing import Callable, Iterable, List, Tuple, TypeVar

from toolz import curry as _curry
from more_itertools import partition as _partition, quantify as _quantify

A = TypeVar("A")

# Re-export toolz version under our API name
curry = _curry

def partition(pred: Callable[[A], bool], seq: Iterable[A]) -> Tuple[List[A], List[A]]:
    # (false_items, true_items), both materialized and order-preserving
    falses, trues = _partition(pred, seq)
    return list(falses), list(trues)

def count_where(pred: Callable[[A], bool], seq: Iterable[A]) -> int:
    return int(_quantify(seq, pred))
