import os

import pytest

from obvtools.annotations import Annotation, Annotations


@pytest.fixture
def store(tmp_path):
    annotations = Annotations(str(tmp_path / "board.brd"))
    annotations.load()
    yield annotations
    annotations.close()


def test_database_path_replaces_last_dot():
    assert Annotations("board.brd").database_path() == "board_brd.sqlite3"


def test_database_path_without_dot_only_appends():
    assert Annotations("board").database_path() == "board.sqlite3"


def test_database_path_uses_dot_in_directory():
    path = Annotations(os.path.join("dir.v1", "board")).database_path()
    assert path == os.path.join("dir_v1", "board") + ".sqlite3"


def test_load_creates_database_file(tmp_path, store):
    assert os.path.exists(store.database_path())
    assert store.annotations == []


def test_add_and_list(store):
    new_id = store.add(1, 10.4, 20.6, "NET1", "U1", "3", "check 'this'")
    store.generate_list()
    assert store.annotations == [
        Annotation(id=new_id, side=1, x=10.0, y=21.0, net="NET1", part="U1", pin="3", note="check 'this'")
    ]


def test_remove_hides_annotation(store):
    first = store.add(0, 1, 2, "A", "B", "C", "one")
    second = store.add(0, 3, 4, "A", "B", "C", "two")
    store.remove(first)
    store.generate_list()
    assert [a.id for a in store.annotations] == [second]


def test_update_changes_note(store):
    ann_id = store.add(0, 1, 2, "A", "B", "C", "old")
    store.update(ann_id, "new")
    store.generate_list()
    assert store.annotations[0].note == "new"


def test_reload_keeps_data(tmp_path):
    board = str(tmp_path / "board.brd")
    with Annotations(board) as first:
        first.load()
        first.add(2, 5, 6, "N", "P", "1", "kept")
    with Annotations(board) as second:
        second.load()
        assert [a.note for a in second.annotations] == ["kept"]
        assert second.annotations[0].side == 2


def test_operations_after_close_raise(store):
    store.close()
    with pytest.raises(RuntimeError):
        store.add(0, 0, 0, "", "", "", "")
    with pytest.raises(RuntimeError):
        store.generate_list()


def test_init_twice_is_harmless(store):
    store.add(0, 0, 0, "N", "P", "1", "x")
    store.init()
    store.generate_list()
    assert len(store.annotations) == 1