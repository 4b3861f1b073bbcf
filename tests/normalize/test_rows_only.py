from __future__ import annotations

from tablenorm.normalize.rules_builtin.rows_only import tables_contain_only_rows
from tablenorm.tree.edits import ChangeLog, InsertChild, RemoveChild


def test_rows_only_table_is_valid(opts, make_table):
    rule = tables_contain_only_rows(opts)
    assert rule.validate(make_table(1, 2)) is None

def test_stray_block_removed_without_synthetic_row(opts, make_table):
    rule = tables_contain_only_rows(opts)
    table = make_table("paragraph", 1)
    diag = rule.validate(table)
    assert [n.type for n in diag.invalids] == ["paragraph"]
    assert diag.add == ()

    ops = list(rule.normalize(ChangeLog(), table, diag))
    assert ops == [RemoveChild(table.key, table.children[0].key, True)]

def test_no_rows_left_inserts_one_empty_row(opts, make_table):
    rule = tables_contain_only_rows(opts)
    table = make_table("paragraph", "paragraph")
    ops = list(rule.normalize(ChangeLog(), table, rule.validate(table)))

    removes = [op for op in ops if isinstance(op, RemoveChild)]
    inserts = [op for op in ops if isinstance(op, InsertChild)]
    assert [op.child_key for op in removes] == [c.key for c in table.children]
    assert all(op.suppress_normalize for op in removes)
    assert ops[-1] is inserts[0] and len(inserts) == 1

    row = inserts[0].node
    assert inserts[0].index == 0 and inserts[0].parent_key == table.key
    assert row.type == opts.type_row
    assert [c.type for c in row.children] == [opts.type_cell]
    assert row.children[0].children[0].text == ""

def test_empty_table_gets_a_row(opts, make_table):
    rule = tables_contain_only_rows(opts)
    diag = rule.validate(make_table())
    assert diag.invalids == ()
    assert len(diag.add) == 1

def test_never_removes_rows(opts, make_table):
    rule = tables_contain_only_rows(opts)
    table = make_table(2, "paragraph", 1, "image", 3)
    ops = list(rule.normalize(ChangeLog(), table, rule.validate(table)))
    row_keys = {c.key for c in table.children if c.type == opts.type_row}
    removed = {op.child_key for op in ops if isinstance(op, RemoveChild)}
    assert len(removed) == 2
    assert not removed & row_keys
