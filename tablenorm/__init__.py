from __future__ import annotations

from .config_model.model import OptionsError, TableOptions, RootCfg, load_config
from .tree import Node, ChangeLog, EditError, apply_edits, make_empty_cell, make_empty_row
from .normalize import (
    Rule,
    Schema,
    NormalizeResult,
    NormalizationError,
    validate_node,
    make_schema,
    normalize_table,
    apply_schema,
    create_align,
)

__version__ = "0.1.0"
