from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping, Protocol, Union

from .node import Node


class EditError(KeyError):
    """An edit addressed a key that is not in the tree (or not under the given parent)."""


# ---- Edit operations ----

@dataclass(frozen=True)
class RemoveChild:
    parent_key: str
    child_key: str
    suppress_normalize: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "remove_child",
            "parent_key": self.parent_key,
            "child_key": self.child_key,
            "suppress_normalize": self.suppress_normalize,
        }


@dataclass(frozen=True)
class InsertChild:
    parent_key: str
    index: int
    node: Node
    suppress_normalize: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "insert_child",
            "parent_key": self.parent_key,
            "index": self.index,
            "node": self.node.to_dict(),
            "suppress_normalize": self.suppress_normalize,
        }


@dataclass(frozen=True)
class SetNodeData:
    node_key: str
    data: Mapping[str, Any] = field(default_factory=dict)
    suppress_normalize: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "set_node_data",
            "node_key": self.node_key,
            "data": dict(self.data),
            "suppress_normalize": self.suppress_normalize,
        }


EditOp = Union[RemoveChild, InsertChild, SetNodeData]


class Emitter(Protocol):
    """Write-only sink for edit operations (the host's change/transform)."""

    def remove_child(self, parent_key: str, child_key: str, *, suppress_normalize: bool = False) -> "Emitter": ...

    def insert_child(self, parent_key: str, index: int, node: Node, *, suppress_normalize: bool = False) -> "Emitter": ...

    def set_node_data(self, node_key: str, data: Mapping[str, Any], *, suppress_normalize: bool = False) -> "Emitter": ...


class ChangeLog:
    """Recording emitter: appends ops in call order and returns itself for chaining."""

    def __init__(self) -> None:
        self.ops: list[EditOp] = []

    def __len__(self) -> int:
        return len(self.ops)

    def __iter__(self):
        return iter(self.ops)

    def remove_child(self, parent_key: str, child_key: str, *, suppress_normalize: bool = False) -> "ChangeLog":
        self.ops.append(RemoveChild(parent_key, child_key, suppress_normalize))
        return self

    def insert_child(self, parent_key: str, index: int, node: Node, *, suppress_normalize: bool = False) -> "ChangeLog":
        self.ops.append(InsertChild(parent_key, int(index), node, suppress_normalize))
        return self

    def set_node_data(self, node_key: str, data: Mapping[str, Any], *, suppress_normalize: bool = False) -> "ChangeLog":
        self.ops.append(SetNodeData(node_key, dict(data), suppress_normalize))
        return self

    def to_list(self) -> list[dict[str, Any]]:
        return [op.to_dict() for op in self.ops]


# ---- Reference application onto a snapshot ----

def _assign_keys(node: Node, keys: Callable[[], str]) -> Node:
    return replace(
        node,
        key=node.key if node.key is not None else keys(),
        children=tuple(_assign_keys(c, keys) for c in node.children),
    )

def _update(root: Node, key: str, fn: Callable[[Node], Node]) -> tuple[Node, bool]:
    if root.key == key:
        return fn(root), True
    for i, child in enumerate(root.children):
        new_child, hit = _update(child, key, fn)
        if hit:
            kids = list(root.children)
            kids[i] = new_child
            return root.with_children(kids), True
    return root, False

def _apply_one(root: Node, op: EditOp, keys: Callable[[], str]) -> Node:
    if isinstance(op, RemoveChild):
        def _remove(parent: Node) -> Node:
            kept = [c for c in parent.children if c.key != op.child_key]
            if len(kept) == len(parent.children):
                raise EditError(f"{op.child_key!r} is not a child of {op.parent_key!r}")
            return parent.with_children(kept)
        target, fn = op.parent_key, _remove

    elif isinstance(op, InsertChild):
        def _insert(parent: Node) -> Node:
            if not 0 <= op.index <= len(parent.children):
                raise EditError(f"index {op.index} out of range for {op.parent_key!r}")
            kids = list(parent.children)
            kids.insert(op.index, _assign_keys(op.node, keys))
            return parent.with_children(kids)
        target, fn = op.parent_key, _insert

    elif isinstance(op, SetNodeData):
        target, fn = op.node_key, (lambda n: n.with_data(op.data))

    else:
        raise TypeError(f"Unknown edit op: {op!r}")

    out, hit = _update(root, target, fn)
    if not hit:
        raise EditError(f"no node with key {target!r}")
    return out

def apply_edits(root: Node, ops: Iterable[EditOp], keys: Callable[[], str]) -> Node:
    """
    Replay ops in order onto an immutable snapshot, returning the new snapshot.
    Inserted templates get keys from `keys` (host-side allocation).
    """
    for op in ops:
        root = _apply_one(root, op, keys)
    return root
