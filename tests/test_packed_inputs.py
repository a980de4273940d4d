from __future__ import annotations

from pathlib import Path

import pytest

from conftest import H2O_XYZ
from packed_inputs import (ProgramMode, create_string_id_function, depth_for_is_str, exporting_path_input,
                           sabc_file_input, xyz_file_input, xyz_files_input)
from prompts import InputAborted
from structure_io import Atom, SABCFile, XYZFile


def test_program_modes() -> None:
    assert ProgramMode("simple") is ProgramMode.SIMPLE
    assert {m.value for m in ProgramMode} == {"test", "simple", "ordinary"}


def test_xyz_file_input_returns_file_and_name(scripted_input, water_xyz: Path, capsys) -> None:
    scripted_input(str(water_xyz))
    xyz, name = xyz_file_input()
    assert name == "water"
    assert len(xyz.atoms) == 3
    assert "Successfully imported from XYZ file." in capsys.readouterr().out


def test_xyz_file_input_rejects_file_without_atoms(scripted_input, capsys) -> None:
    scripted_input("empty.xyz", "full.xyz")

    def parser(path: str) -> XYZFile:
        return XYZFile([Atom("C", 1)]) if path == "full.xyz" else XYZFile([])

    xyz, name = xyz_file_input(parser=parser)
    assert name == "full"
    assert "No Atoms in xyz file. Can not proceed." in capsys.readouterr().out


def test_xyz_file_input_retries_after_missing_file(scripted_input, tmp_path: Path, water_xyz: Path, capsys) -> None:
    scripted_input(str(tmp_path / "nothing.xyz"), str(water_xyz))
    _, name = xyz_file_input()
    assert name == "water"
    assert "Error:" in capsys.readouterr().out


def test_xyz_files_input_collects_valid_files(scripted_input, tmp_path: Path, capsys) -> None:
    (tmp_path / "b.xyz").write_text(H2O_XYZ)
    (tmp_path / "a.xyz").write_text(H2O_XYZ)
    (tmp_path / "notes.txt").write_text("not a structure")
    scripted_input(str(tmp_path))

    imported = xyz_files_input()

    assert [name for _, name in imported] == ["a", "b"]
    assert "Found 2 valid xyz files." in capsys.readouterr().out


def test_xyz_files_input_reprompts_on_directory_without_xyz(scripted_input, tmp_path: Path, capsys) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    good = tmp_path / "good"
    good.mkdir()
    (good / "w.xyz").write_text(H2O_XYZ)
    prompts = scripted_input(str(empty), str(good))

    imported = xyz_files_input()

    assert len(prompts) == 2
    assert prompts[0] == "Please enter the directory path for XYZ files: "
    assert len(imported) == 1
    assert "Can't find any valid xyz files in the directory." in capsys.readouterr().out


def test_xyz_files_input_skips_files_without_atoms(scripted_input, tmp_path: Path) -> None:
    for name in ("one.xyz", "two.xyz"):
        (tmp_path / name).write_text("")
    scripted_input(str(tmp_path))

    def parser(path: str) -> XYZFile:
        return XYZFile([Atom("N", 1)]) if path.endswith("two.xyz") else XYZFile()

    imported = xyz_files_input(parser=parser)
    assert [name for _, name in imported] == ["two"]


def test_xyz_files_input_rejects_non_directory(scripted_input, water_xyz: Path, capsys) -> None:
    scripted_input(str(water_xyz))
    with pytest.raises(InputAborted):
        xyz_files_input()
    assert "Not a valid directory. Please try again." in capsys.readouterr().out


def test_sabc_file_input(scripted_input, water_sabc: Path) -> None:
    scripted_input(str(water_sabc))
    sabc, name = sabc_file_input()
    assert name == "water"
    assert len(sabc.substituted) == 2


def test_sabc_file_input_rejects_invalid_and_empty(scripted_input, capsys) -> None:
    files = {
        "invalid": SABCFile(),
        "empty": SABCFile(substituted=[], is_valid=True),
        "good": SABCFile.from_lines(["[original]", "1 2 3", "[substituted]", "1 1 2 3"]),
    }
    scripted_input("invalid", "empty", "good")

    _, name = sabc_file_input(parser=files.__getitem__)

    out = capsys.readouterr().out
    assert name == "good"
    assert "Not a valid SABC file." in out
    assert "No SIS information." in out


def test_exporting_path_optional_empty_skips(scripted_input, capsys) -> None:
    prompts = scripted_input("")
    assert exporting_path_input("Summary") == (False, None)
    assert prompts == ["Please enter Summary exporting path (leave empty if not to save): "]
    assert "The results will not be saved." in capsys.readouterr().out


def test_exporting_path_mandatory(scripted_input, tmp_path: Path, capsys) -> None:
    prompts = scripted_input("", str(tmp_path / "missing"), str(tmp_path))
    assert exporting_path_input(is_optional=False) == (True, tmp_path)
    assert prompts[0] == "Please enter exporting path: "
    out = capsys.readouterr().out
    assert "The directory path can not be empty." in out
    assert "Not a valid directory. Please try again." in out


def test_string_id_function() -> None:
    labeller = create_string_id_function({10: 2, 11: 0, 12: 1})
    atoms = [Atom("C", 10), Atom("H", 11), Atom("O"), Atom("N", 99), Atom("H", 12)]

    labels, ids, order = labeller(atoms)

    assert labels == ["C3", "H1", "H2"]
    assert ids == [2, 0, 1]
    assert order == [1, 2, 0]


@pytest.mark.parametrize("depth, label", [(1, "Single"), (2, "Double"), (3, "Triple"), (5, "5-atom")])
def test_depth_for_is_str(depth: int, label: str) -> None:
    assert depth_for_is_str(depth) == label


def test_xyz_files_input_skips_empty_file_with_real_reader(scripted_input, tmp_path: Path, capsys) -> None:
    (tmp_path / "empty.xyz").write_text("")
    (tmp_path / "blank.xyz").write_text("\n  \n")
    (tmp_path / "w.xyz").write_text(H2O_XYZ)
    prompts = scripted_input(str(tmp_path))

    imported = xyz_files_input()

    assert len(prompts) == 1
    assert [name for _, name in imported] == ["w"]
    out = capsys.readouterr().out
    assert "Found 1 valid xyz files." in out
    assert "Error:" not in out


def test_xyz_files_input_reprompts_when_listing_fails(scripted_input, tmp_path: Path, monkeypatch, capsys) -> None:
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "w.xyz").write_text(H2O_XYZ)
    good = tmp_path / "good"
    good.mkdir()
    (good / "w.xyz").write_text(H2O_XYZ)
    real_iterdir = Path.iterdir

    def iterdir(self):
        if self == locked:
            raise PermissionError(13, "Permission denied", str(self))
        return real_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", iterdir)
    prompts = scripted_input(str(locked), str(good))

    imported = xyz_files_input()

    assert len(prompts) == 2
    assert len(imported) == 1
    assert "Error in reading files in the directory" in capsys.readouterr().out
