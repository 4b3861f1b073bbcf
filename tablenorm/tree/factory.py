from __future__ import annotations

from ..config_model.model import TableOptions
from ..utils.fp import curry
from .node import Node

# ---------- shared predicates ----------

@curry
def is_type(tag: str, node: Node) -> bool:
    return node.type == tag

# ---------- empty-node factory ----------
# Fresh templates on every call: each inserted node gets its own host key.

def make_empty_cell(opts: TableOptions) -> Node:
    return Node(type=opts.type_cell, children=(Node(type=opts.type_text, text=""),))

def make_empty_row(opts: TableOptions) -> Node:
    return Node(type=opts.type_row, children=(make_empty_cell(opts),))
