from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ...config_model.model import TableOptions
from ...tree.edits import Emitter
from ...tree.factory import is_type, make_empty_cell
from ...tree.node import Node
from ...utils.fp import count_where
from ..engine import Rule

@dataclass(frozen=True)
class RowDefect:
    row: Node
    invalids: tuple[Node, ...]
    add: int

def count_columns(table: Node, opts: TableOptions) -> int:
    """Widest row's cell count across the table's rows, minimum 1."""
    is_row = is_type(opts.type_row)
    is_cell = is_type(opts.type_cell)
    return max(
        [1] + [count_where(is_cell, row.children) for row in table.children if is_row(row)]
    )

def rows_contain_required_columns(opts: TableOptions) -> Rule:
    """
    Rows contain only cells, and as many cells as the table has columns.
    Short rows are padded with empty cells at the front; wider rows are never truncated.
    """
    is_table = is_type(opts.type_table)
    is_row = is_type(opts.type_row)
    is_cell = is_type(opts.type_cell)

    def validate(table: Node) -> Optional[tuple[RowDefect, ...]]:
        columns = count_columns(table, opts)
        defects: list[RowDefect] = []
        for row in filter(is_row, table.children):
            cells = count_where(is_cell, row.children)
            invalids = tuple(c for c in row.children if not is_cell(c))
            # right count of cells and nothing else
            if not invalids and cells == columns:
                continue
            defects.append(RowDefect(row=row, invalids=invalids, add=columns - cells))
        return tuple(defects) or None

    def normalize(change: Emitter, table: Node, defects: tuple[RowDefect, ...]) -> Emitter:
        for d in defects:
            for child in d.invalids:
                change.remove_child(d.row.key, child.key, suppress_normalize=True)
            for _ in range(d.add):
                change.insert_child(d.row.key, 0, make_empty_cell(opts), suppress_normalize=True)
        return change

    return Rule(name="rows_contain_required_columns", match=is_table, validate=validate, normalize=normalize)
