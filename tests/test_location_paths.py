from inventory_service.app.crud.location_paths import (
    creates_cycle,
    join_path,
    leaf_segment,
    rebase_path,
)


def test_join_path_at_root_and_below():
    assert join_path(None, "Shop") == "/Shop"
    assert join_path("", "Shop") == "/Shop"
    assert join_path("/Shop", "Bench1") == "/Shop/Bench1"


def test_leaf_segment():
    assert leaf_segment("/Shop/Bench1/Drawer1") == "Drawer1"
    assert leaf_segment("/Shop") == "Shop"
    assert leaf_segment("") == ""


def test_rebase_path_keeps_leaf_of_stored_path():
    # the leaf comes from the stored path, not the child's current name
    assert rebase_path("/Workshop", "/Shop/OldName") == "/Workshop/OldName"
    assert rebase_path("/a/b", "/x/y/z") == "/a/b/z"


def _parents(mapping):
    return lambda node: mapping.get(node)


def test_creates_cycle_detects_self_and_descendants():
    parents = _parents({"bench": "shop", "drawer": "bench", "shop": None})

    assert creates_cycle("shop", "shop", parents)
    assert creates_cycle("shop", "drawer", parents)
    assert creates_cycle("bench", "drawer", parents)


def test_creates_cycle_allows_unrelated_parent_and_root():
    parents = _parents({"bench": "shop", "drawer": "bench", "store": None})

    assert not creates_cycle("drawer", "store", parents)
    assert not creates_cycle("bench", None, parents)


def test_creates_cycle_reports_corrupt_loop():
    parents = _parents({"a": "b", "b": "a"})

    assert creates_cycle("x", "a", parents)
