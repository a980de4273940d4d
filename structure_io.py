# --------------------------------------------------------------
# File: structure_io.py
# --------------------------------------------------------------
"""
Readers for the structure files handled by the interactive tools.

- XYZFile: molecular geometry, parsed with ASE.
- SABCFile: rotational constants (A, B, C) of a parent molecule and of its
  isotopically substituted species.

SABC layout::

    # comments start with '#'
    [original]
    A B C
    [substituted]
    3 A B C
    3,5 A B C

Each substituted line lists the identifiers of the substituted atoms
(comma separated) followed by the three constants.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import unquote, urlparse

import numpy as np
from ase.io import read

log = logging.getLogger('MolTool.structure_io')


class StructureFileError(ValueError):
    """Malformed XYZ or SABC content."""


def _local_path(path) -> Path:
    text = str(path)
    if text.startswith('file://'):
        return Path(unquote(urlparse(text).path))
    return Path(text)


def last_path_component_name(path) -> str:
    """File name without directory and extension."""
    return _local_path(path).stem


@dataclass
class Atom:
    name: str
    identifier: Optional[int] = None
    position: Optional[np.ndarray] = None

    def __str__(self):
        if self.identifier is None:
            return self.name
        return f'{self.name}{self.identifier}'


class XYZFile:
    """Atoms of one XYZ geometry. `atoms` is None until something is read."""

    def __init__(self, atoms: Optional[List[Atom]] = None, source: Optional[Path] = None):
        self.atoms = atoms
        self.source = source

    @classmethod
    def from_path(cls, path) -> 'XYZFile':
        path = _local_path(path)
        if not path.is_file():
            raise FileNotFoundError(f'No such file: {path}')
        with open(path) as fh:
            if not fh.read().strip():
                log.debug(f'{path} is empty')
                return cls([], source=path)
        try:
            frame = read(str(path), index=0, format='extxyz')
        except StopIteration:
            return cls([], source=path)
        except Exception as e:
            raise StructureFileError(f'Cannot parse XYZ file {path}: {e}') from e
        atoms = [Atom(symbol, i + 1, np.array(pos, dtype=float))
                 for i, (symbol, pos) in enumerate(zip(frame.get_chemical_symbols(), frame.get_positions()))]
        log.debug(f'Read {len(atoms)} atoms from {path}')
        return cls(atoms, source=path)

    from_url = from_path

    @property
    def positions(self) -> np.ndarray:
        if not self.atoms:
            return np.zeros((0, 3))
        return np.array([a.position for a in self.atoms], dtype=float)

    def __len__(self):
        return len(self.atoms or [])


@dataclass
class SubstitutionRecord:
    atom_ids: Tuple[int, ...]
    constants: np.ndarray

    @property
    def depth(self) -> int:
        return len(self.atom_ids)


@dataclass
class SABCFile:
    original: Optional[np.ndarray] = None
    substituted: Optional[List[SubstitutionRecord]] = None
    source: Optional[Path] = None
    is_valid: bool = False

    @classmethod
    def from_path(cls, path) -> 'SABCFile':
        path = _local_path(path)
        with open(path) as fh:
            lines = fh.readlines()
        return cls.from_lines(lines, source=path)

    @classmethod
    def from_lines(cls, lines, source: Optional[Path] = None) -> 'SABCFile':
        sections = {}
        current = None
        for lineno, raw in enumerate(lines, start=1):
            line = raw.split('#', 1)[0].strip()
            if not line:
                continue
            if line.startswith('[') and line.endswith(']'):
                current = line[1:-1].strip().lower()
                sections.setdefault(current, [])
                continue
            if current is None:
                raise StructureFileError(f'line {lineno}: data before any section header')
            sections[current].append((lineno, line))

        original_rows = sections.get('original', [])
        if len(original_rows) != 1:
            log.warning(f'{source}: expected one [original] row, found {len(original_rows)}')
            return cls(source=source)
        lineno, row = original_rows[0]
        original = _parse_constants(row.split(), lineno)
        if original is None:
            return cls(source=source)

        substituted = []
        for lineno, row in sections.get('substituted', []):
            fields = row.split()
            if len(fields) != 4:
                raise StructureFileError(f'line {lineno}: expected "<ids> A B C", got {row!r}')
            try:
                ids = tuple(int(x) for x in fields[0].split(',') if x)
            except ValueError:
                raise StructureFileError(f'line {lineno}: bad atom identifiers {fields[0]!r}') from None
            substituted.append(SubstitutionRecord(ids, _parse_constants(fields[1:], lineno)))
        return cls(original=original, substituted=substituted, source=source, is_valid=True)


def _parse_constants(fields, lineno) -> Optional[np.ndarray]:
    if len(fields) != 3:
        return None
    try:
        return np.array([float(x) for x in fields])
    except ValueError:
        raise StructureFileError(f'line {lineno}: rotational constants must be numbers') from None
