from __future__ import annotations
import json, logging, sys
from typing import Any, Dict

from ..config_model.model import LoggingCfg

PACKAGE_LOGGER = "tablenorm"

# everything a bare LogRecord carries; whatever else is on a record came in via `extra=`
_RECORD_FIELDS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}

def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)

class JsonFormatter(logging.Formatter):
    """
    One JSON object per line. Call-site fields (rule, node_key, passes, ops,
    mode, ...) come first, the fixed fields win on a clash.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {k: v for k, v in vars(record).items() if k not in _RECORD_FIELDS}
        payload.update(
            time=self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            level=record.levelname,
            logger=record.name,
            message=record.getMessage(),
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)

def get_logger(name: str = PACKAGE_LOGGER, level: str = "INFO", structured_json: bool = True) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(_level(level))
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if structured_json
                         else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger

def configure_logging(cfg: LoggingCfg | None = None) -> logging.Logger:
    """
    Attach the [logging] config to the package logger. Module loggers
    (tablenorm.normalize.engine, ...) propagate into it. Re-applying only
    moves the level; the first call decides the format.
    """
    cfg = cfg or LoggingCfg()
    logger = get_logger(PACKAGE_LOGGER, cfg.level, cfg.structured_json)
    logger.setLevel(_level(cfg.level))
    return logger
