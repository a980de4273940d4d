# --------------------------------------------------------------
# File: packed_inputs.py
# --------------------------------------------------------------
"""
Ready-made interactive imports built on `prompts.file_input`:

- xyz_file_input: one .xyz file
- xyz_files_input: every .xyz file in a directory
- sabc_file_input: one SABC file
- exporting_path_input: where (and whether) to save results

Parsing errors raised by the readers are shown to the user, who is then asked
for another path.
"""
import enum
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from prompts import file_input
from structure_io import Atom, SABCFile, XYZFile, last_path_component_name

log = logging.getLogger('MolTool.inputs')


class ProgramMode(enum.Enum):
    """How a structure finding run behaves downstream.

    TEST checks whether a known molecule passes all filters and never
    re-signs coordinates. SIMPLE runs with default parameters.
    """
    TEST = 'test'
    SIMPLE = 'simple'
    ORDINARY = 'ordinary'


def xyz_file_input(parser: Callable[[str], XYZFile] = XYZFile.from_path) -> Tuple[XYZFile, str]:
    """Ask for one .xyz file; returns (parsed file, file name without extension)."""
    result = {}

    def try_action(file_path):
        xyz = parser(file_path)
        if not xyz.atoms:
            print('No Atoms in xyz file. Can not proceed.')
            return False
        result['xyz'] = xyz
        result['name'] = last_path_component_name(file_path)
        log.info(f'Imported {len(xyz.atoms)} atoms from {file_path}')
        return True

    file_input(try_action, name='XYZ file')
    return result['xyz'], result['name']


def xyz_files_input(parser: Callable[[str], XYZFile] = XYZFile.from_path) -> List[Tuple[XYZFile, str]]:
    """Ask for a directory and import every .xyz file in it.

    Files without atoms are skipped. The directory is refused when it cannot
    be listed or holds no usable file.
    """
    imported: List[Tuple[XYZFile, str]] = []

    def try_action(file_path):
        imported.clear()
        directory = Path(file_path)
        if not file_path or not directory.is_dir():
            print('Not a valid directory. Please try again.')
            return False
        try:
            xyz_paths = sorted(p for p in directory.iterdir() if p.suffix == '.xyz')
        except OSError as e:
            log.error(f'Cannot list {directory}: {e}')
            print('Error in reading files in the directory')
            return False

        for xyz_path in xyz_paths:
            xyz = parser(str(xyz_path))
            if not xyz.atoms:
                log.debug(f'Skipping {xyz_path}: no atoms')
                continue
            imported.append((xyz, last_path_component_name(xyz_path)))

        if not imported:
            print("Can't find any valid xyz files in the directory. Can not proceed.")
            return False
        print(f'Found {len(imported)} valid xyz files.')
        return True

    file_input(try_action, name='XYZ files', message='the directory path for XYZ files', success_message=False)
    return list(imported)


def sabc_file_input(parser: Callable[[str], SABCFile] = SABCFile.from_path) -> Tuple[SABCFile, str]:
    """Ask for one SABC file; returns (parsed file, file name without extension)."""
    result = {}

    def try_action(file_path):
        sabc = parser(file_path)
        if not sabc.is_valid:
            print('Not a valid SABC file.')
            return False
        if not sabc.substituted:
            print('No SIS information.')
            return False
        result['sabc'] = sabc
        result['name'] = last_path_component_name(file_path)
        log.info(f'Imported {len(sabc.substituted)} substitutions from {file_path}')
        return True

    file_input(try_action, name='SABC file')
    return result['sabc'], result['name']


def exporting_path_input(name: str = '', is_optional: bool = True) -> Tuple[bool, Optional[Path]]:
    """Ask for an existing directory to save results in.

    Returns (save_results, directory). When the prompt is optional an empty
    answer means (False, None).
    """
    chosen = {'save': True, 'path': None}
    message = f'{name} exporting path'.strip()
    if is_optional:
        message += ' (leave empty if not to save)'

    def try_action(write_path):
        if not write_path:
            if is_optional:
                chosen['save'] = False
                print('The results will not be saved.')
                return True
            print('The directory path can not be empty.')
            return False
        path = Path(write_path)
        if not path.is_dir():
            print('Not a valid directory. Please try again.')
            return False
        chosen['path'] = path
        print(f'The result will be saved in {path}.')
        return True

    file_input(try_action, message=message, success_message=False)
    return chosen['save'], chosen['path']


# ----------------------------------------------------------------------------
# Labels for isotopic substitution results
# ----------------------------------------------------------------------------

def create_string_id_function(id_dict: Dict[int, int]) -> Callable[[List[Atom]], Tuple[List[str], List[int], List[int]]]:
    """Build a labeller for groups of atoms.

    The returned function maps atoms to (labels, ids, order): label is the
    atom name followed by its mapped id + 1, atoms without identifier or
    without an entry in `id_dict` are dropped, and `order` lists the label
    positions sorted by id.
    """
    def string_ids_of_atoms(atoms):
        labels = []
        ids = []
        for atom in atoms:
            if atom.identifier is None or atom.identifier not in id_dict:
                continue
            mapped = id_dict[atom.identifier]
            labels.append(f'{atom.name}{mapped + 1}')
            ids.append(mapped)
        order = sorted(range(len(labels)), key=lambda i: ids[i])
        return labels, ids, order

    return string_ids_of_atoms


def depth_for_is_str(depth: int) -> str:
    return {1: 'Single', 2: 'Double', 3: 'Triple'}.get(depth, f'{depth}-atom')
