from __future__ import annotations
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence

# -------- public types --------

@dataclass(frozen=True)
class Node:
    """
    Immutable snapshot of one document element.

    `key` is assigned by the host; templates built for insertion carry key=None
    until the host places them. `text` is only meaningful on text leaves.
    `data` is a read-only view over a private copy; values inside it (the align
    list) are shared, so replace them rather than mutate them.
    """
    type: str
    key: Optional[str] = None
    children: tuple["Node", ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)
    text: str = ""

    def __post_init__(self) -> None:
        # accept lists/None from callers, store a tuple and a read-only mapping
        object.__setattr__(self, "children", tuple(self.children or ()))
        object.__setattr__(self, "data", MappingProxyType(dict(self.data or {})))

    @property
    def first(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    def with_children(self, children: Sequence["Node"]) -> "Node":
        return replace(self, children=tuple(children))

    def with_data(self, data: Mapping[str, Any]) -> "Node":
        return replace(self, data=dict(data))

    def find(self, key: str) -> Optional["Node"]:
        """Depth-first lookup by key (self included)."""
        if self.key == key:
            return self
        for child in self.children:
            hit = child.find(key)
            if hit is not None:
                return hit
        return None

    # -------- plain-dict codec --------

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.key is not None:
            out["key"] = self.key
        if self.data:
            out["data"] = dict(self.data)
        if self.children:
            out["nodes"] = [c.to_dict() for c in self.children]
        if self.text:
            out["text"] = self.text
        return out

    @classmethod
    def from_dict(
        cls,
        raw: Mapping[str, Any],
        *,
        keys: Callable[[], str] | None = None,
        type_text: str = "text",
    ) -> "Node":
        """
        Build a snapshot from nested dicts.

        Children may be under "nodes" or "children". A `{"kind": "text"}` leaf
        takes its type from `type_text` and its content from "text" or the
        concatenated "ranges". Missing keys are minted with `keys` when given.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"node must be a mapping, got {type(raw).__name__}")
        kind = raw.get("kind")
        if kind == "text":
            typ = raw.get("type") or type_text
        else:
            typ = raw.get("type")
        if not typ:
            raise ValueError(f"node without a type: {dict(raw)!r}")

        text = raw.get("text")
        if text is None and raw.get("ranges"):
            text = "".join(str(r.get("text", "")) for r in raw["ranges"])

        key = raw.get("key")
        if key is None and keys is not None:
            key = keys()

        kids = raw.get("nodes")
        if kids is None:
            kids = raw.get("children") or []

        return cls(
            type=str(typ),
            key=None if key is None else str(key),
            children=tuple(cls.from_dict(k, keys=keys, type_text=type_text) for k in kids),
            data=dict(raw.get("data") or {}),
            text=str(text or ""),
        )
