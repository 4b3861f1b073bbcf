from __future__ import annotations
from pathlib import Path
from typing import Any
import pytest

from tablenorm.config_model.model import TableOptions
from tablenorm.tree.node import Node
from tablenorm.utils.ids import KeyAllocator

@pytest.fixture(scope="session")
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]

@pytest.fixture
def opts() -> TableOptions:
    return TableOptions()

def _cell(opts: TableOptions, label: str) -> dict[str, Any]:
    return {"type": opts.type_cell, "nodes": [{"kind": "text", "text": label}]}

def _child(opts: TableOptions, i: int, shape: Any) -> dict[str, Any]:
    # int -> row of n cells; str -> a non-row block; list -> row with those child types
    if isinstance(shape, int):
        return {"type": opts.type_row, "nodes": [_cell(opts, f"{i}.{j}") for j in range(shape)]}
    if isinstance(shape, str):
        return {"type": shape, "nodes": [{"kind": "text", "text": shape}]}
    return {
        "type": opts.type_row,
        "nodes": [
            _cell(opts, f"{i}.{j}") if t == opts.type_cell else {"type": t, "nodes": [{"kind": "text", "text": t}]}
            for j, t in enumerate(shape)
        ],
    }

@pytest.fixture
def make_table(opts):
    """make_table(2, 3, "paragraph", ["table_cell", "image"], align=[...]) -> keyed Node."""
    def _make(*children: Any, align: list[str] | None = None, seed: str = "t") -> Node:
        raw: dict[str, Any] = {"type": opts.type_table, "nodes": [_child(opts, i, c) for i, c in enumerate(children)]}
        if align is not None:
            raw["data"] = {"align": list(align)}
        return Node.from_dict(raw, keys=KeyAllocator(seed=seed))
    return _make
