from __future__ import annotations

from ..config_model.model import TableOptions
from .engine import Rule

def default_rules(opts: TableOptions) -> list[Rule]:
    """
    The canonical rule set, in the order it must run:
    rows-only -> column count -> alignment.
    Alignment reads the first row, so it relies on the structural rules going first.
    """
    from .rules_builtin.rows_only import tables_contain_only_rows
    from .rules_builtin.column_count import rows_contain_required_columns
    from .rules_builtin.align import table_contain_align_data

    rules: list[Rule] = []
    if opts.rows_only:
        rules.append(tables_contain_only_rows(opts))
    rules.append(rows_contain_required_columns(opts))
    rules.append(table_contain_align_data(opts))
    return rules
