from __future__ import annotations
import hashlib, json
from itertools import count
from typing import Any, Iterator

def _json_dumps_stable(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), default=str)

def stable_hash(obj: Any, algo: str = "sha256") -> str:
    h = hashlib.new(algo)
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    h.update(_json_dumps_stable(obj).encode("utf-8"))
    return h.hexdigest()

def short_id(obj: Any, n: int = 10) -> str:
    return stable_hash(obj)[:n]

class KeyAllocator:
    """
    Deterministic node-key minting for the in-memory host.
    Same seed -> same key sequence, so repaired trees are reproducible.
    """

    def __init__(self, seed: str = "doc", n: int = 10) -> None:
        self.seed = seed
        self.n = n
        self._counter: Iterator[int] = count()

    def __call__(self) -> str:
        return short_id({"seed": self.seed, "i": next(self._counter)}, self.n)
