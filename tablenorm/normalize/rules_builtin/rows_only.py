from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ...config_model.model import TableOptions
from ...tree.edits import Emitter
from ...tree.factory import is_type, make_empty_row
from ...tree.node import Node
from ...utils.fp import partition
from ..engine import Rule

@dataclass(frozen=True)
class RowsOnlyDiagnosis:
    invalids: tuple[Node, ...]
    add: tuple[Node, ...]

def tables_contain_only_rows(opts: TableOptions) -> Rule:
    """
    Tables hold rows only, and at least one.
    Non-row children are removed; a table left with no rows gets one empty row.
    Never removes a row.
    """
    is_table = is_type(opts.type_table)
    is_row = is_type(opts.type_row)

    def validate(table: Node) -> Optional[RowsOnlyDiagnosis]:
        invalids, rows = partition(is_row, table.children)
        # no rows at all (vacuously true for an empty table)
        add = (make_empty_row(opts),) if not rows else ()
        if not invalids and not add:
            return None
        return RowsOnlyDiagnosis(invalids=tuple(invalids), add=add)

    def normalize(change: Emitter, table: Node, diagnosis: RowsOnlyDiagnosis) -> Emitter:
        for child in diagnosis.invalids:
            change.remove_child(table.key, child.key, suppress_normalize=True)
        for row in diagnosis.add:
            change.insert_child(table.key, 0, row)
        return change

    return Rule(name="tables_contain_only_rows", match=is_table, validate=validate, normalize=normalize)
