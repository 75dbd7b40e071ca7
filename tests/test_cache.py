import json

import pytest

from gitworkon.cache import Cache, ProjectInfo, default_cache_path, load_cache


def test_get_missing_returns_empty_info(tmp_path):
    cache = Cache({}, tmp_path / "c.json")
    assert cache.get("nope").source == ""


def test_set_then_get(tmp_path):
    cache = Cache({}, tmp_path / "c.json")
    cache.set("p1", ProjectInfo(source="s"))
    assert cache.get("p1") == ProjectInfo(source="s")


def test_write_stores_json(tmp_path):
    path = tmp_path / "c.json"
    cache = Cache({}, path)
    cache.set("p1", ProjectInfo(source="s"))
    cache.write()
    assert json.loads(path.read_text()) == {"p1": {"source": "s"}}


def test_write_and_load_round_trip(tmp_path):
    path = tmp_path / "c.json"
    cache = Cache({"a": ProjectInfo("x"), "b": ProjectInfo("y")}, path)
    cache.write()
    loaded = load_cache(path)
    assert loaded.data == cache.data
    assert loaded.path == path


def test_load_missing_creates_empty_file(tmp_path):
    path = tmp_path / "nested" / "projects.json"
    cache = load_cache(path)
    assert cache.data == {}
    assert json.loads(path.read_text()) == {}


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "c.json"
    path.write_text("not json")
    with pytest.raises(ValueError):
        load_cache(path)


def test_load_non_object_raises(tmp_path):
    path = tmp_path / "c.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        load_cache(path)


def test_write_failure_is_not_raised(tmp_path):
    path = tmp_path / "missing_dir" / "c.json"
    cache = Cache({"p": ProjectInfo("s")}, path)
    cache.write()
    assert not path.exists()


def test_default_cache_path_name():
    path = default_cache_path()
    assert path.name == "projects.json"
    assert path.parent.name == "git_workon"