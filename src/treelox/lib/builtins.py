import time
from typing import Any

from ..functions import NativeFunction


def _clock() -> float:
    return time.time()


_NATIVES = (NativeFunction("clock", 0, _clock),)


def make_default_globals() -> dict[str, Any]:
    """Bindings every session's global frame starts with."""
    return {native.name: native for native in _NATIVES}
