"""Tests for dotted key path helpers."""

import pytest

from depwatch import Namespace, PathResolutionError, convert
from depwatch import keypath


class TestResolve:
    def test_split(self):
        assert keypath.split("info.name") == ("info", "name")
        assert keypath.split("count") == ("count",)

    def test_objects_and_mappings(self):
        root = Namespace(info=Namespace(tags={"lang": "py"}))
        assert keypath.resolve(root, "info.tags.lang") == "py"

    def test_none_is_a_valid_leaf(self):
        root = Namespace(a=None)
        assert keypath.resolve(root, "a") is None

    def test_none_intermediate(self):
        root = Namespace(a=None)
        with pytest.raises(PathResolutionError) as info:
            keypath.resolve(root, "a.b.c")
        assert info.value.index == 1
        assert info.value.segment == "b"
        assert "a.b.c" in str(info.value)

    def test_missing_mapping_key(self):
        with pytest.raises(PathResolutionError) as info:
            keypath.resolve(Namespace(m={}), "m.x")
        assert info.value.index == 1


class TestAssign:
    def test_assigns_through_fields(self):
        root = Namespace.from_mapping({"info": {"name": "Ada"}})
        convert(root)
        keypath.assign(root, "info.name", "Grace")
        assert root.info.name == "Grace"

    def test_assigns_into_mapping(self):
        root = Namespace(m={"x": 1})
        keypath.assign(root, "m.x", 2)
        assert root.m == {"x": 2}

    def test_top_level(self):
        root = Namespace(count=1)
        keypath.assign(root, "count", 5)
        assert root.count == 5

    def test_unreachable_parent(self):
        root = Namespace(info=None)
        with pytest.raises(PathResolutionError) as info:
            keypath.assign(root, "info.name", "x")
        assert info.value.index == 1
