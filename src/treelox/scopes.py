from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import InternalError, LoxRuntimeError
from .tokens import Token

_MISSING = object()


class Frame:
    """One lexical scope: its own bindings plus the handle of the enclosing frame."""

    __slots__ = ("parent", "values", "captured")

    def __init__(self, parent: Optional[int]):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        # set once a closure may still reach this frame after it is exited
        self.captured = False

    def __repr__(self) -> str:
        return f"<Frame parent={self.parent} names={sorted(self.values)}>"


class ScopeArena:
    """
    Owns every environment frame of a session.

    Frames are addressed by integer handles. A closure keeps the handle of
    its defining frame, and a frame keeps the handle of its parent, so the
    scope graph never holds direct references between frames.

    A block or call releases its frame on exit. Released handles go on a
    free list and are handed out again by `new_frame`. Frames reachable from
    a closure are marked captured and are never released.
    """

    def __init__(self) -> None:
        self._frames: list[Optional[Frame]] = []
        self._free: list[int] = []

    def __len__(self) -> int:
        """Number of live frames."""
        return len(self._frames) - len(self._free)

    @property
    def capacity(self) -> int:
        """Number of handle slots ever allocated, live or free."""
        return len(self._frames)

    def new_frame(self, parent: Optional[int] = None) -> int:
        if parent is not None:
            self._frame(parent)
        if self._free:
            handle = self._free.pop()
            self._frames[handle] = Frame(parent)
            return handle
        self._frames.append(Frame(parent))
        return len(self._frames) - 1

    def capture(self, handle: int) -> None:
        """Keep `handle` and all of its ancestors alive for a closure."""
        current: Optional[int] = handle
        while current is not None:
            frame = self._frame(current)
            if frame.captured:
                return
            frame.captured = True
            current = frame.parent

    def release(self, handle: int) -> None:
        frame = self._frame(handle)
        if frame.captured:
            return
        self._frames[handle] = None
        self._free.append(handle)

    def _frame(self, handle: int) -> Frame:
        frame = self._frames[handle] if 0 <= handle < len(self._frames) else None
        if frame is None:
            raise InternalError(f"no environment frame with handle {handle}")
        return frame

    def names(self, handle: int) -> Dict[str, Any]:
        """A copy of the bindings declared directly in this frame."""
        return dict(self._frame(handle).values)

    # ----- chain walking (dynamic lookups) -----

    def define(self, handle: int, name: str, value: Any) -> None:
        self._frame(handle).values[name] = value

    def get(self, handle: int, name: Token) -> Any:
        current: Optional[int] = handle
        while current is not None:
            frame = self._frame(current)
            value = frame.values.get(name.lexeme, _MISSING)
            if value is not _MISSING:
                return value
            current = frame.parent
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, handle: int, name: Token, value: Any) -> None:
        current: Optional[int] = handle
        while current is not None:
            frame = self._frame(current)
            if name.lexeme in frame.values:
                frame.values[name.lexeme] = value
                return
            current = frame.parent
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    # ----- resolved lookups -----

    def ancestor(self, handle: int, distance: int) -> int:
        current = handle
        for _ in range(distance):
            parent = self._frame(current).parent
            if parent is None:
                raise InternalError(
                    f"frame {handle} has no ancestor at distance {distance}"
                )
            current = parent
        return current

    def get_at(self, handle: int, distance: int, name: str) -> Any:
        frame = self._frame(self.ancestor(handle, distance))
        value = frame.values.get(name, _MISSING)
        if value is _MISSING:
            raise InternalError(f"resolved variable '{name}' missing at distance {distance}")
        return value

    def assign_at(self, handle: int, distance: int, name: str, value: Any) -> None:
        frame = self._frame(self.ancestor(handle, distance))
        if name not in frame.values:
            raise InternalError(f"resolved variable '{name}' missing at distance {distance}")
        frame.values[name] = value
