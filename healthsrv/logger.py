# healthsrv/logger.py
"""
Structured logger with a pretty terminal renderer.

Calls take a message plus positional key/value fields:

    log.info("cache warmed", "entries", 120, "took", "35ms")

and are printed as a block, one field per line:

    📝 [14:02:11] INFO: cache warmed
       entries: 120
       took: 35ms
"""
import logging
import sys
from datetime import datetime

from .config import APP_NAME, LOG_LEVEL

BADKEY = "!BADKEY"

STATUS_OK = "✅"
STATUS_REDIRECT = "⚠️"
STATUS_ERROR = "❌"


def _pairs(args):
    """Turn (k1, v1, k2, v2, ...) into [(k1, v1), (k2, v2), ...]."""
    fields = []
    i = 0
    while i < len(args):
        key = args[i]
        if not isinstance(key, str) or i + 1 == len(args):
            # dangling key or non-string in key position
            fields.append((BADKEY, key))
            i += 1
            continue
        fields.append((key, args[i + 1]))
        i += 2
    return fields


def _fixed(value: int, precision: int) -> str:
    whole, frac = divmod(value, 10 ** precision)
    if not frac:
        return str(whole)
    return f"{whole}.{frac:0{precision}d}".rstrip("0")


def format_duration(seconds: float) -> str:
    """
    Render a duration the compact way Go prints time.Duration:
    250ns, 12.5µs, 1.5ms, 2.25s, 1m30s, 1h1m1s.
    """
    ns = int(round(seconds * 1e9))
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{_fixed(ns, 3)}µs"
    if ns < 1_000_000_000:
        return f"{sign}{_fixed(ns, 6)}ms"

    hours, rem = divmod(ns, 3600 * 10 ** 9)
    minutes, rem = divmod(rem, 60 * 10 ** 9)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_fixed(rem, 9)}s"


def status_emoji(status_code: int) -> str:
    if status_code >= 400:
        return STATUS_ERROR
    if status_code >= 300:
        return STATUS_REDIRECT
    return STATUS_OK


class LevelPolicy:
    """Minimum-level check shared by a handler and everything derived from it."""

    def __init__(self, min_level: int = LOG_LEVEL):
        self.min_level = min_level

    def enabled(self, level: int) -> bool:
        return level >= self.min_level


class PrettyHandler(logging.Handler):
    """
    Prints each record as a multi-line block instead of a single line.

    Level filtering is left to the LevelPolicy; this class only renders.
    `with_attrs` / `with_group` return derived handlers for scoped loggers.
    """

    def __init__(self, policy=None, stream=None, attrs=None, prefix=""):
        super().__init__()
        self.policy = policy or LevelPolicy()
        # None means "whatever sys.stdout is at emit time"
        self.stream = stream
        self.attrs = list(attrs or [])
        self.prefix = prefix

    def is_enabled(self, level: int) -> bool:
        return self.policy.enabled(level)

    def filter(self, record):
        if not self.is_enabled(record.levelno):
            return False
        return super().filter(record)

    def _qualify(self, fields):
        if not self.prefix:
            return list(fields)
        return [(self.prefix + key, value) for key, value in fields]

    def with_attrs(self, attrs):
        return PrettyHandler(
            policy=self.policy,
            stream=self.stream,
            attrs=self.attrs + self._qualify(attrs),
            prefix=self.prefix,
        )

    def with_group(self, name: str):
        if not name:
            return self
        return PrettyHandler(
            policy=self.policy,
            stream=self.stream,
            attrs=self.attrs,
            prefix=f"{self.prefix}{name}.",
        )

    def render(self, record) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        lines = [f"\n📝 [{ts}] {record.levelname}: {record.getMessage()}"]
        fields = self.attrs + self._qualify(getattr(record, "fields", ()))
        for key, value in fields:
            lines.append(f"   {key}: {value}")
        return "\n".join(lines) + "\n"

    def emit(self, record):
        try:
            stream = self.stream or sys.stdout
            stream.write(self.render(record))
            stream.flush()
        except Exception:
            self.handleError(record)


class Logger:
    """Info/Error/Debug/Request front end over a PrettyHandler."""

    def __init__(self, handler=None, name: str = APP_NAME):
        self.name = name
        self.handler = handler or PrettyHandler(LevelPolicy(LOG_LEVEL))
        # Private, unregistered logger: every instance owns exactly one handler
        # and nothing reaches the root logger.
        self._log = logging.Logger(name, logging.DEBUG)
        self._log.propagate = False
        self._log.addHandler(self.handler)

    def _emit(self, level: int, msg: str, fields):
        self._log.log(level, msg, extra={"fields": fields})

    def info(self, msg: str, *fields):
        self._emit(logging.INFO, msg, _pairs(fields))

    def error(self, msg: str, err=None, *fields):
        pairs = _pairs(fields)
        if err is not None:
            pairs.append(("error", str(err) or type(err).__name__))
        self._emit(logging.ERROR, msg, pairs)

    def debug(self, msg: str, *fields):
        self._emit(logging.DEBUG, msg, _pairs(fields))

    def request(self, method: str, path: str, remote_addr: str, status_code: int, duration: float):
        self.info(
            "HTTP Request",
            "method", method,
            "path", path,
            "status", status_emoji(status_code),
            "code", status_code,
            "duration", format_duration(duration),
            "ip", remote_addr,
        )

    def with_attrs(self, *fields):
        return Logger(self.handler.with_attrs(_pairs(fields)), name=self.name)

    def with_group(self, name: str):
        return Logger(self.handler.with_group(name), name=self.name)


# Process-wide instance for code that is not handed a Logger explicitly.
_global = None


def init_logger():
    """Create a new process-wide logger, replacing any existing one."""
    global _global
    _global = Logger()
    return _global


def get_logger():
    if _global is None:
        return init_logger()
    return _global
