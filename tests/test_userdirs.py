import os

from obvtools.userdirs import UserDir, create_dir, create_dirs, get_user_dir


def test_create_dir_new_and_existing(tmp_path):
    target = str(tmp_path / "new")
    assert create_dir(target) is True
    assert os.path.isdir(target)
    assert create_dir(target) is True


def test_create_dir_on_file_fails(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert create_dir(str(blocker)) is False


def test_create_dirs_nested(tmp_path):
    assert create_dirs(f"{tmp_path}/a/b/c/") is True
    assert (tmp_path / "a" / "b" / "c").is_dir()


def test_create_dirs_ignores_last_component(tmp_path):
    assert create_dirs(f"{tmp_path}/a/name") is True
    assert (tmp_path / "a").is_dir()
    assert not (tmp_path / "a" / "name").exists()


def test_create_dirs_blocked_by_file(tmp_path):
    (tmp_path / "f").write_text("x")
    assert create_dirs(f"{tmp_path}/f/sub/") is False


def test_xdg_config_home(tmp_path):
    path = get_user_dir(UserDir.CONFIG, {"XDG_CONFIG_HOME": str(tmp_path)})
    assert path == f"{tmp_path}/OpenBoardView/"
    assert os.path.isdir(path)


def test_xdg_data_home(tmp_path):
    path = get_user_dir(UserDir.DATA, {"XDG_DATA_HOME": str(tmp_path)})
    assert path == f"{tmp_path}/OpenBoardView/"


def test_home_fallback_config(tmp_path):
    path = get_user_dir(UserDir.CONFIG, {"HOME": str(tmp_path)})
    assert path == f"{tmp_path}/.config/OpenBoardView/"
    assert (tmp_path / ".config" / "OpenBoardView").is_dir()


def test_home_fallback_data(tmp_path):
    path = get_user_dir(UserDir.DATA, {"HOME": str(tmp_path)})
    assert path == f"{tmp_path}/.local/share/OpenBoardView/"
    assert (tmp_path / ".local" / "share" / "OpenBoardView").is_dir()


def test_no_environment_uses_current_dir():
    assert get_user_dir(UserDir.CONFIG, {}) == "./"


def test_unwritable_location_uses_current_dir(tmp_path):
    (tmp_path / "f").write_text("x")
    assert get_user_dir(UserDir.CONFIG, {"XDG_CONFIG_HOME": f"{tmp_path}/f"}) == "./"