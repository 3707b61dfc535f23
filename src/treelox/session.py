from __future__ import annotations

from typing import Any, Dict

from .lib import make_default_globals
from .scopes import ScopeArena


class Session:
    """
    All state one interpretation owns: the frame arena, the global frame and
    the resolver's binding table (expression node id -> scope distance).

    Independent sessions never share frames or bindings, so several programs
    can be interpreted side by side.
    """

    def __init__(self, *, with_natives: bool = True):
        self.arena = ScopeArena()
        self.globals = self.arena.new_frame()
        self.bindings: Dict[int, int] = {}
        if with_natives:
            for name, value in make_default_globals().items():
                self.arena.define(self.globals, name, value)

    def bind(self, node_id: int, distance: int) -> None:
        self.bindings[node_id] = distance

    def distance_of(self, node_id: int) -> int | None:
        return self.bindings.get(node_id)

    def global_names(self) -> Dict[str, Any]:
        return self.arena.names(self.globals)
