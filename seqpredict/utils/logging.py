"""
Root logger setup. Only the host calls ``configure_logging`` (``open_session``
does it on startup); modules just use ``logging.getLogger(__name__)``.

``LOG_JSON=1`` switches to one JSON object per line with ``ts``, ``level``,
``logger``, ``msg`` and any ``extra=`` fields.
"""
from __future__ import annotations
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seqpredict.config import Settings

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TS_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_STD_FIELDS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        out = {
            "ts": ts.strftime(TS_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        out.update({k: v for k, v in record.__dict__.items()
                    if k not in _STD_FIELDS and not k.startswith("_")})
        if record.exc_info:
            out["exc"] = self.formatException(record.exc_info)
        return json.dumps(out, default=str)


def configure_logging(cfg: "Settings") -> None:
    level = logging.getLevelName(cfg.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    fmt = JsonLineFormatter() if cfg.log_json else logging.Formatter(PLAIN_FORMAT, datefmt=TS_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if cfg.log_file:
        path = Path(cfg.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for h in handlers:
        h.setFormatter(fmt)
    logging.basicConfig(level=level, handlers=handlers, force=True)
