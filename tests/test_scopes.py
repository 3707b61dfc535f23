from __future__ import annotations

import pytest

from treelox.errors import InternalError, LoxRuntimeError
from treelox.scopes import ScopeArena
from treelox.tokens import Token, TokenType


def _name(lexeme: str) -> Token:
    return Token(TokenType.IDENTIFIER, lexeme, None, 7)


def test_handles_are_sequential():
    arena = ScopeArena()
    root = arena.new_frame()
    child = arena.new_frame(root)
    assert (root, child) == (0, 1)
    assert len(arena) == 2


def test_get_walks_the_parent_chain():
    arena = ScopeArena()
    root = arena.new_frame()
    child = arena.new_frame(root)
    arena.define(root, "a", 1.0)
    assert arena.get(child, _name("a")) == 1.0


def test_define_shadows_and_redefines():
    arena = ScopeArena()
    root = arena.new_frame()
    child = arena.new_frame(root)
    arena.define(root, "a", 1.0)
    arena.define(child, "a", 2.0)
    arena.define(child, "a", 3.0)
    assert arena.get(child, _name("a")) == 3.0
    assert arena.get(root, _name("a")) == 1.0


def test_assign_updates_the_frame_that_declares():
    arena = ScopeArena()
    root = arena.new_frame()
    child = arena.new_frame(root)
    arena.define(root, "a", 1.0)
    arena.assign(child, _name("a"), 5.0)
    assert arena.names(root) == {"a": 5.0}
    assert arena.names(child) == {}


def test_undefined_name_is_a_runtime_error():
    arena = ScopeArena()
    root = arena.new_frame()
    with pytest.raises(LoxRuntimeError) as info:
        arena.get(root, _name("missing"))
    assert str(info.value) == "[line 7] Runtime Error: Undefined variable 'missing'."
    assert info.value.token == "missing"
    with pytest.raises(LoxRuntimeError):
        arena.assign(root, _name("missing"), 1.0)


def test_resolved_access_by_distance():
    arena = ScopeArena()
    root = arena.new_frame()
    middle = arena.new_frame(root)
    leaf = arena.new_frame(middle)
    arena.define(root, "a", "root")
    arena.define(middle, "a", "middle")
    assert arena.ancestor(leaf, 2) == root
    assert arena.get_at(leaf, 1, "a") == "middle"
    assert arena.get_at(leaf, 2, "a") == "root"
    arena.assign_at(leaf, 2, "a", "changed")
    assert arena.names(root) == {"a": "changed"}
    assert arena.names(middle) == {"a": "middle"}


def test_resolved_miss_is_an_internal_error():
    arena = ScopeArena()
    root = arena.new_frame()
    leaf = arena.new_frame(root)
    with pytest.raises(InternalError):
        arena.get_at(leaf, 1, "nope")
    with pytest.raises(InternalError):
        arena.assign_at(leaf, 0, "nope", 1.0)
    with pytest.raises(InternalError):
        arena.ancestor(leaf, 5)


def test_unknown_handle_is_an_internal_error():
    arena = ScopeArena()
    with pytest.raises(InternalError):
        arena.new_frame(3)
    with pytest.raises(InternalError):
        arena.define(0, "a", 1.0)


def test_names_returns_a_copy():
    arena = ScopeArena()
    root = arena.new_frame()
    arena.define(root, "a", 1.0)
    snapshot = arena.names(root)
    snapshot["b"] = 2.0
    assert arena.names(root) == {"a": 1.0}


def test_released_handles_are_reused():
    arena = ScopeArena()
    root = arena.new_frame()
    child = arena.new_frame(root)
    arena.release(child)
    assert len(arena) == 1
    with pytest.raises(InternalError):
        arena.names(child)
    assert arena.new_frame(root) == child
    assert arena.capacity == 2


def test_captured_frames_and_their_ancestors_survive_release():
    arena = ScopeArena()
    root = arena.new_frame()
    middle = arena.new_frame(root)
    leaf = arena.new_frame(middle)
    arena.define(middle, "kept", 1.0)
    arena.capture(leaf)
    arena.release(leaf)
    arena.release(middle)
    assert len(arena) == 3
    assert arena.get_at(leaf, 1, "kept") == 1.0
