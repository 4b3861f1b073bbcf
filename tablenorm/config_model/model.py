from __future__ import annotations
from typing import Any, Mapping
from pathlib import Path
import os
from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    model_validator,
)


class OptionsError(ValueError):
    """Raised eagerly when table options are unusable (blank or colliding type tags)."""


# ---------- Leaf models ----------

class TableOptions(BaseModel):
    """
    Node type tags the rules match against, plus repair defaults.
    All matching is plain string equality against these tags.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    type_table: str = "table"
    type_row: str = "table_row"
    type_cell: str = "table_cell"
    type_text: str = "text"
    default_align: str = "none"
    rows_only: bool = True

    @model_validator(mode="after")
    def _tags_ok(self):
        tags = {
            "type_table": self.type_table,
            "type_row": self.type_row,
            "type_cell": self.type_cell,
            "type_text": self.type_text,
        }
        blank = [k for k, v in tags.items() if not str(v).strip()]
        if blank:
            raise ValueError(f"type tags must be non-empty: {', '.join(blank)}")
        seen: dict[str, str] = {}
        for k, v in tags.items():
            if v in seen:
                raise ValueError(f"{k} collides with {seen[v]} (both {v!r})")
            seen[v] = k
        return self

    @classmethod
    def coerce(cls, obj: "TableOptions | Mapping[str, Any] | None" = None) -> "TableOptions":
        """Accept an instance, a plain mapping (camelCase keys allowed) or None for defaults."""
        if isinstance(obj, cls):
            return obj
        raw = dict(obj or {})
        # host-side option names: typeTable / typeRow / typeCell / typeText
        for camel, snake in (("typeTable", "type_table"), ("typeRow", "type_row"),
                             ("typeCell", "type_cell"), ("typeText", "type_text")):
            if camel in raw and snake not in raw:
                raw[snake] = raw.pop(camel)
        try:
            return cls(**raw)
        except ValidationError as e:
            raise OptionsError(f"Invalid table options: {e}") from e


class NormalizeCfg(BaseModel):
    max_passes: int = 64

    @model_validator(mode="after")
    def _passes_ok(self):
        if self.max_passes < 1:
            raise ValueError("normalize.max_passes must be >= 1")
        return self


class LoggingCfg(BaseModel):
    level: str = "INFO"
    structured_json: bool = True


# ---------- Root ----------

class RootCfg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    table: TableOptions = TableOptions()
    normalize: NormalizeCfg = NormalizeCfg()
    logging: LoggingCfg = LoggingCfg()

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str]) -> "RootCfg":
        try:
            import tomllib  # py>=3.11
        except ImportError:
            import tomli as tomllib

        p = Path(path)
        try:
            with p.open("rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise RuntimeError(f"Failed to parse TOML at {p}: {e}") from e

        raw.setdefault("table", {})
        raw.setdefault("normalize", {})
        raw.setdefault("logging", {})

        return cls(
            table=TableOptions.coerce(raw["table"]),
            normalize=NormalizeCfg(**raw["normalize"]),
            logging=LoggingCfg(**raw["logging"]),
        )

    @classmethod
    def load(cls, path: str | None = None) -> "RootCfg":
        explicit = path or os.environ.get("TABLENORM_CFG")
        final = Path(explicit or "config/config.toml").resolve()
        # only the implicit default location may be missing
        if not explicit and not final.exists():
            return cls()
        return cls.from_toml(final)


def load_config(path: str | None = None) -> RootCfg:
    return RootCfg.load(path)
