from __future__ import annotations
import argparse, json, sys
from pathlib import Path

from tablenorm.config_model.model import RootCfg
from tablenorm.normalize.engine import NormalizationError, apply_schema, make_schema, normalize_table
from tablenorm.tree.node import Node
from tablenorm.utils.ids import KeyAllocator
from tablenorm.utils.log import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Normalize a JSON table tree and print the edit ops.")
    ap.add_argument("input", help="JSON file with a table node ('-' for stdin)")
    ap.add_argument("--config", default=None, help="config TOML (default: $TABLENORM_CFG or config/config.toml)")
    ap.add_argument("--mode", choices=["first-match", "schema"], default="first-match")
    ap.add_argument("--ops-only", action="store_true", help="print only the edit ops")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        cfg = RootCfg.load(args.config)
    except (ValueError, RuntimeError, OSError) as e:
        print(f"config error: {e}", file=sys.stderr)
        return 2

    log = configure_logging(cfg.logging)

    keys = KeyAllocator(seed=args.input)
    try:
        text = sys.stdin.read() if args.input == "-" else Path(args.input).read_text(encoding="utf-8")
        root = Node.from_dict(json.loads(text), keys=keys, type_text=cfg.table.type_text)
    except (OSError, ValueError) as e:
        # missing file, bad JSON (JSONDecodeError is a ValueError), or a malformed node
        print(f"input error: {e}", file=sys.stderr)
        return 2

    try:
        if args.mode == "schema":
            res = apply_schema(root, make_schema(cfg.table), max_passes=cfg.normalize.max_passes, keys=keys)
        else:
            res = normalize_table(root, cfg.table, max_passes=cfg.normalize.max_passes, keys=keys)
    except NormalizationError as e:
        log.error("normalization failed", extra={"input": args.input, "error": str(e)})
        return 1

    ops = [op.to_dict() for op in res.ops]
    out = ops if args.ops_only else {"passes": res.passes, "ops": ops, "node": res.node.to_dict()}
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
