# iconhub/core/logging/context.py
from __future__ import annotations
import contextvars
from collections.abc import Iterator
from contextlib import contextmanager

# Per-task log context (moduleId, source, ...). Every asyncio task gets its own copy.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("iconhub.logctx", default=None)

def setLogContext(**kvs):
    """Set or update per-log context values (moduleId, source, etc.)."""
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    _logContextVar.set(current)

def clearLogContext():
    """Clear context after a load request is fully handled."""
    _logContextVar.set(None)

def getLogContext():
    """Return current context dict or None."""
    return _logContextVar.get()

@contextmanager
def logContext(**kvs) -> Iterator[None]:
    """Scoped variant of setLogContext; restores the previous context on exit."""
    token = _logContextVar.set({**(_logContextVar.get() or {}), **{k: v for k, v in kvs.items() if v is not None}})
    try:
        yield
    finally:
        _logContextVar.reset(token)
