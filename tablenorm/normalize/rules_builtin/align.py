from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ...config_model.model import TableOptions
from ...tree.edits import Emitter
from ...tree.factory import is_type
from ...tree.node import Node
from ..engine import Rule

ALIGN_NONE = "none"

def create_align(columns: int, base: Sequence[Any] | None = None, default: str = ALIGN_NONE) -> list[Any]:
    """
    Exactly `columns` alignment tags: existing entries kept as-is by index,
    extras dropped, new columns filled with `default`.
    """
    base = list(base or [])
    return [base[i] if i < len(base) else default for i in range(max(columns, 0))]

def read_align(table: Node) -> tuple[list[Any], bool]:
    """
    (align entries, well_typed). Anything but a list/tuple reads as no entries;
    a missing or null value is well typed.
    """
    raw = table.data.get("align")
    if raw is None:
        return [], True
    if isinstance(raw, (list, tuple)):
        return list(raw), True
    return [], False

@dataclass(frozen=True)
class AlignDiagnosis:
    align: tuple[Any, ...]
    columns: int

def table_contain_align_data(opts: TableOptions) -> Rule:
    """Table data carries one align tag per column of its first row."""
    is_table = is_type(opts.type_table)
    is_row = is_type(opts.type_row)

    def validate(table: Node) -> Optional[AlignDiagnosis]:
        align, well_typed = read_align(table)
        row = table.first
        # structure not sound yet; the structural rules go first
        if row is None or not is_row(row):
            return None
        columns = len(row.children)
        if well_typed and len(align) == columns:
            return None
        return AlignDiagnosis(align=tuple(align), columns=columns)

    def normalize(change: Emitter, table: Node, diagnosis: AlignDiagnosis) -> Emitter:
        data = {**table.data, "align": create_align(diagnosis.columns, diagnosis.align, opts.default_align)}
        return change.set_node_data(table.key, data, suppress_normalize=True)

    return Rule(name="table_contain_align_data", match=is_table, validate=validate, normalize=normalize)
