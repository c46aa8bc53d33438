import struct

import pytest

from minirt.cli import check_scene_path, main, parse_options
from minirt.errors import ErrorKind, MiniRTError
from minirt.scene import Option

SCENE = "R 4 3\nA 0.2 255,255,255\nc 0,0,0 0,0,-1 70\nsp 0,0,-5 2 255,0,0\n"


def test_parse_options_empty():
    assert parse_options([]) == set()


def test_parse_options_save():
    assert parse_options(["--save"]) == {Option.SAVE}


def test_parse_options_duplicate():
    with pytest.raises(MiniRTError) as info:
        parse_options(["--save", "--save"])
    assert info.value.kind is ErrorKind.DOUBLE_FLAG


@pytest.mark.parametrize("flag", ["--bad", "--sav", "--save2", ""])
def test_parse_options_bad_flag(flag):
    with pytest.raises(MiniRTError) as info:
        parse_options([flag])
    assert info.value.kind is ErrorKind.BAD_FLAG


def test_check_scene_path_accepts_rt():
    assert check_scene_path("scenes/room.rt") == "scenes/room.rt"


@pytest.mark.parametrize("path", ["scene", "scene.rtx", "a.rt.rt", "scene.txt"])
def test_check_scene_path_rejects(path):
    with pytest.raises(MiniRTError) as info:
        check_scene_path(path)
    assert info.value.kind is ErrorKind.BAD_PATH


def test_main_without_arguments_fails(capsys):
    assert main([]) == 1
    assert "wrong scene path" in capsys.readouterr().err


def test_main_bad_flag_fails(tmp_path, capsys):
    scene_file = tmp_path / "s.rt"
    scene_file.write_text(SCENE)
    assert main([str(scene_file), "--nope"]) == 1
    assert "wrong flag" in capsys.readouterr().err


def test_main_bad_scene_fails(tmp_path, capsys):
    scene_file = tmp_path / "s.rt"
    scene_file.write_text("X 1 2\n")
    assert main([str(scene_file), "--save"]) == 1
    assert "wrong scene" in capsys.readouterr().err


def test_main_save_writes_bmp(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "output_bmp").mkdir()
    (tmp_path / "s.rt").write_text(SCENE)
    assert main(["s.rt", "--save"]) == 0
    data = (tmp_path / "output_bmp" / "output.bmp").read_bytes()
    assert data[:2] == b"BM"
    assert struct.unpack_from("<ii", data, 18) == (4, 3)
    out = capsys.readouterr().out
    assert "converting scene to bmp..." in out
    assert "saved!" in out


def test_main_save_without_output_dir_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "s.rt").write_text(SCENE)
    assert main(["s.rt", "--save"]) == 1