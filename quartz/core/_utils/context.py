from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any


@contextmanager
def set_contextvar(contextvar: "ContextVar", value: Any):
    """Set the context variable to the given value for the duration of the block."""
    reset_token = contextvar.set(value)
    try:
        yield
    finally:
        contextvar.reset(reset_token)
