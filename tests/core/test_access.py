# pylint: disable=missing-function-docstring,missing-module-docstring,invalid-name

import pytest

from quartz.core import (
    Dispatcher,
    Error,
    ErrorKind,
    Float,
    Index,
    Int,
    List,
    Literal,
    Map,
    OverrideRegistry,
    String,
    Symbol,
    UserObject,
    current_dispatcher,
    has_index,
    index_get,
    index_set,
    nil,
)


@pytest.fixture(autouse=True)
def isolate_dispatcher():
    reset_token = current_dispatcher.set(Dispatcher(OverrideRegistry()))
    yield
    current_dispatcher.reset(reset_token)


class TestListRead:
    def test_in_range(self):
        assert index_get(List(1, 2, 3), Int(1)) == Int(2)

    def test_out_of_range_is_nil(self):
        assert index_get(List(1, 2, 3), Int(5)) is nil
        assert index_get(List(), Int(0)) is nil

    def test_negative_index(self):
        assert index_get(List(1, 2, 3), Int(-1)) == Int(3)
        assert index_get(List(1, 2, 3), Int(-4)) is nil

    def test_non_integer_index(self):
        with pytest.raises(Error) as excinfo:
            index_get(List(1), Float(0.0))
        assert excinfo.value.is_kind(ErrorKind.TYPE_MISMATCH)


class TestListWrite:
    def test_replaces_slot_in_place(self):
        list_ = List(1, 2, 3)
        alias = list_
        assert index_set(list_, Int(0), Int(4)) == Int(4)
        assert alias == List(4, 2, 3)

    def test_negative_index(self):
        list_ = List(1, 2, 3)
        index_set(list_, Int(-1), Int(9))
        assert list_ == List(1, 2, 9)

    def test_past_the_end_raises(self):
        list_ = List(1, 2, 3)
        with pytest.raises(Error) as excinfo:
            index_set(list_, Int(3), Int(4))
        assert excinfo.value.is_kind(ErrorKind.INDEX_ERROR)
        assert list_ == List(1, 2, 3)


class TestMapAccess:
    def test_structural_key_match(self):
        map_ = Map([(List(1, 2), "list key"), (Int(1), "int key")])
        assert index_get(map_, List(1, 2)) == String("list key")
        assert index_get(map_, Float(1.0)) == String("int key")

    def test_missing_key_is_nil(self):
        assert index_get(Map(), Symbol("missing")) is nil

    def test_write_updates_in_place(self):
        map_ = Map([("a", 1), ("b", 2)])
        index_set(map_, String("a"), Int(3))
        index_set(map_, String("c"), Int(4))
        assert list(map_.items()) == [
            (String("a"), Int(3)),
            (String("b"), Int(2)),
            (String("c"), Int(4)),
        ]


class TestStringRead:
    def test_char(self):
        assert index_get(String("abc"), Int(1)) == String("b")

    def test_out_of_range(self):
        assert index_get(String("abc"), Int(3)) is nil

    def test_write_unsupported(self):
        with pytest.raises(Error) as excinfo:
            index_set(String("abc"), Int(0), String("x"))
        assert excinfo.value.is_kind(ErrorKind.TYPE_MISMATCH)


class TestOverrides:
    def test_user_object_index(self):
        storage = {}
        grid = UserObject(
            "Grid",
            {
                "[]": lambda self, key: storage.get(key.value),
                "[]=": lambda self, key, value: storage.__setitem__(key.value, value),
            },
        )
        index_set(grid, Int(1), String("x"))
        assert index_get(grid, Int(1)) == String("x")
        assert index_get(grid, Int(2)) is nil
        assert has_index(grid, Int(1))
        assert not has_index(grid, Int(2))

    def test_without_override(self):
        with pytest.raises(Error) as excinfo:
            index_get(Int(1), Int(0))
        assert excinfo.value.is_kind(ErrorKind.TYPE_MISMATCH)


class TestHasIndex:
    def test_list(self):
        assert has_index(List(1), Int(0))
        assert has_index(List(1), Int(-1))
        assert not has_index(List(1), Int(1))

    def test_map(self):
        assert has_index(Map([("a", nil)]), String("a"))
        assert not has_index(Map(), String("a"))


class TestIndexNode:
    def test_evaluates_collection_then_key(self):
        node = Index(Literal(List("a", "b")), Literal(Int(1)))
        assert node.evaluate() == String("b")
