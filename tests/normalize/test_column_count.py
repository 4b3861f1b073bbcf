from __future__ import annotations

from tablenorm.normalize.rules_builtin.column_count import (
    RowDefect,
    count_columns,
    rows_contain_required_columns,
)
from tablenorm.tree.edits import ChangeLog, InsertChild, RemoveChild


def test_count_columns_is_widest_row_min_one(opts, make_table):
    assert count_columns(make_table(2, 3, 1), opts) == 3
    assert count_columns(make_table(), opts) == 1
    assert count_columns(make_table(0, 0), opts) == 1
    # non-row children don't contribute
    assert count_columns(make_table(1, "paragraph"), opts) == 1

def test_valid_table_has_no_diagnosis(opts, make_table):
    rule = rows_contain_required_columns(opts)
    table = make_table(2, 2, 2)
    assert rule.match(table)
    assert rule.validate(table) is None

def test_match_is_type_equality(opts, make_table):
    rule = rows_contain_required_columns(opts)
    assert not rule.match(make_table(2).children[0])

def test_short_rows_are_padded_to_widest(opts, make_table):
    rule = rows_contain_required_columns(opts)
    table = make_table(2, 3, 1)
    defects = rule.validate(table)

    # conforming row (index 1) omitted, order kept
    assert [d.row.key for d in defects] == [table.children[0].key, table.children[2].key]
    assert [d.add for d in defects] == [1, 2]
    assert all(d.invalids == () for d in defects)

    change = rule.normalize(ChangeLog(), table, defects)
    ops = list(change)
    assert len(ops) == 3
    assert all(isinstance(op, InsertChild) for op in ops)
    assert all(op.index == 0 and op.suppress_normalize for op in ops)
    assert [op.parent_key for op in ops] == [table.children[0].key] + [table.children[2].key] * 2

def test_inserted_cells_are_fresh_empty_cells(opts, make_table):
    rule = rows_contain_required_columns(opts)
    table = make_table(3, 1)
    ops = list(rule.normalize(ChangeLog(), table, rule.validate(table)))
    cells = [op.node for op in ops]
    assert cells[0] is not cells[1]
    for cell in cells:
        assert cell.type == opts.type_cell
        assert cell.key is None
        assert [c.type for c in cell.children] == [opts.type_text]
        assert cell.children[0].text == ""

def test_extraneous_children_removed_without_padding(opts, make_table):
    rule = rows_contain_required_columns(opts)
    table = make_table(2, [opts.type_cell, "image", opts.type_cell])
    (defect,) = rule.validate(table)
    assert isinstance(defect, RowDefect)
    assert defect.add == 0
    assert [c.type for c in defect.invalids] == ["image"]

    ops = list(rule.normalize(ChangeLog(), table, (defect,)))
    assert ops == [RemoveChild(table.children[1].key, defect.invalids[0].key, True)]

def test_removals_come_before_insertions_per_row(opts, make_table):
    rule = rows_contain_required_columns(opts)
    table = make_table(3, [opts.type_cell, "image"])
    ops = list(rule.normalize(ChangeLog(), table, rule.validate(table)))
    assert [type(op) for op in ops] == [RemoveChild, InsertChild, InsertChild]
