from __future__ import annotations

# Public API re-exports (keep small & stable)
from .engine import (
    Rule,
    Schema,
    Normalizer,
    Validator,
    NormalizeResult,
    NormalizationError,
    to_validator,
    validate_node,
    make_schema,
    normalize_table,
    apply_schema,
)
from .registry import default_rules
from .rules_builtin.align import create_align
