from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Mapping, Optional
import logging

from ..config_model.model import TableOptions
from ..tree.edits import ChangeLog, EditOp, Emitter, apply_edits
from ..tree.node import Node
from ..utils.ids import KeyAllocator

logger = logging.getLogger(__name__)

# ---- Types ----

Normalizer = Callable[[Emitter], Emitter]
Validator = Callable[[Node], Optional[Normalizer]]

@dataclass(frozen=True)
class Rule:
    """
    match: cheap applicability test; validate: None when the node is fine,
    otherwise a diagnosis; normalize: appends the repair for that diagnosis.
    normalize never re-validates.
    """
    name: str
    match: Callable[[Node], bool]
    validate: Callable[[Node], Any]
    normalize: Callable[[Emitter, Node, Any], Emitter]

@dataclass(frozen=True)
class Schema:
    rules: tuple[Rule, ...]

@dataclass(frozen=True)
class NormalizeResult:
    node: Node
    ops: tuple[EditOp, ...] = field(default_factory=tuple)
    passes: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.ops)

class NormalizationError(RuntimeError):
    """Repairs kept firing past the configured pass limit."""

# ---- Rule -> validator ----

def to_validator(rule: Rule) -> Validator:
    """Diagnose now, repair later: the returned normalizer closes over the diagnosis."""
    def validate_rule(node: Node) -> Optional[Normalizer]:
        if not rule.match(node):
            return None
        diagnosis = rule.validate(node)
        if diagnosis is None:
            return None
        logger.debug("rule fired", extra={"rule": rule.name, "node_key": node.key})
        return lambda change: rule.normalize(change, node, diagnosis)
    return validate_rule

# ---- Mode A: first match ----

def validate_node(opts: TableOptions | Mapping[str, Any] | None = None) -> Validator:
    """
    Validator returning the repair of the first violated rule, or None.
    Options are checked here, before any node is seen.
    """
    from .registry import default_rules
    validators = [to_validator(r) for r in default_rules(TableOptions.coerce(opts))]

    def validate_table_node(node: Node) -> Optional[Normalizer]:
        for validator in validators:
            normalizer = validator(node)
            if normalizer is not None:
                return normalizer
        return None

    return validate_table_node

# ---- Mode B: declarative rule set ----

def make_schema(opts: TableOptions | Mapping[str, Any] | None = None) -> Schema:
    from .registry import default_rules
    return Schema(rules=tuple(default_rules(TableOptions.coerce(opts))))

# ---- In-memory host drivers ----

def _walk(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from _walk(child)

def _keys_for(root: Node) -> KeyAllocator:
    return KeyAllocator(seed=str(root.key or "doc"))

def normalize_table(
    root: Node,
    opts: TableOptions | Mapping[str, Any] | None = None,
    *,
    max_passes: int = 64,
    keys: Callable[[], str] | None = None,
) -> NormalizeResult:
    """
    Drive first-match validation to a fixpoint: repair the first defect found
    (document order), re-snapshot, repeat until nothing fires.
    """
    validator = validate_node(opts)
    keys = keys or _keys_for(root)
    ops: list[EditOp] = []
    passes = 0

    while True:
        normalizer = next(filter(None, map(validator, _walk(root))), None)
        if normalizer is None:
            break
        if passes >= max_passes:
            raise NormalizationError(f"table did not converge after {max_passes} passes")
        change = normalizer(ChangeLog())
        root = apply_edits(root, change.ops, keys)
        ops.extend(change.ops)
        passes += 1

    if passes:
        logger.info("normalized", extra={"passes": passes, "ops": len(ops), "mode": "first_match"})
    return NormalizeResult(node=root, ops=tuple(ops), passes=passes)

def apply_schema(
    root: Node,
    schema: Schema,
    *,
    max_passes: int = 64,
    keys: Callable[[], str] | None = None,
) -> NormalizeResult:
    """
    Host-style loop over a declarative rule set: each pass applies every
    matching rule that reports a defect (re-reading the node between rules),
    and passes repeat until one changes nothing.
    """
    keys = keys or _keys_for(root)
    ops: list[EditOp] = []
    passes = 0

    while True:
        pass_ops: list[EditOp] = []
        targets = [n.key for n in _walk(root) if n.key is not None and any(r.match(n) for r in schema.rules)]
        for key in targets:
            for rule in schema.rules:
                node = root.find(key)
                if node is None or not rule.match(node):
                    continue
                diagnosis = rule.validate(node)
                if diagnosis is None:
                    continue
                logger.debug("rule fired", extra={"rule": rule.name, "node_key": key})
                change = rule.normalize(ChangeLog(), node, diagnosis)
                root = apply_edits(root, change.ops, keys)
                pass_ops.extend(change.ops)
        if not pass_ops:
            break
        if passes >= max_passes:
            raise NormalizationError(f"schema did not converge after {max_passes} passes")
        ops.extend(pass_ops)
        passes += 1

    if passes:
        logger.info("normalized", extra={"passes": passes, "ops": len(ops), "mode": "schema"})
    return NormalizeResult(node=root, ops=tuple(ops), passes=passes)
