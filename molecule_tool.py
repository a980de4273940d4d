#!/usr/bin/env python3
"""
molecule_tool.py

Interactive front end (CLI) for importing molecular structure files and
exporting a summary of them.

Responsibilities:
- Load settings from config.yaml (overridable from the command line)
- Import one XYZ file, a directory of XYZ files or an SABC file, asking the
  user again whenever a path or a file is not usable
- Print an aligned summary of the imported data
- Optionally save the summary as CSV inside a new, time-stamped directory

NOTES:
- `test` mode never saves anything; `simple` mode takes every setting from
  the configuration; `ordinary` mode asks for the rounding digits.
- Closing standard input (Ctrl-D) at any prompt ends the program with
  status 1.
"""

import argparse
import copy
import logging
import sys
import time
from pathlib import Path
from zoneinfo import ZoneInfo

import yaml

from packed_inputs import (ProgramMode, depth_for_is_str, exporting_path_input, sabc_file_input,
                           xyz_file_input, xyz_files_input)
from prompts import InputAborted, input_value, print_welcome_banner
from utils import (appended_unix_time, create_csv_string, create_new_directory, srounded, srounded_string,
                   string_with_space, time_interval_to_string, time_now, write_text)

# ----------------------------------------------------------------------------
# Logging
# ----------------------------------------------------------------------------
log = logging.getLogger('MolTool')

# ----------------------------------------------------------------------------
# Helpers: load config
# ----------------------------------------------------------------------------

DEFAULT_CONFIG = {
    'mode': 'ordinary',
    'output': {
        'nil_string': 'N/A',
        'separator': '_',
        'digits': 6,
        'directory_name': 'results',
        'subdirectories': ['csv'],
    },
    'display': {
        'timezone': None,
        'banner': 'Structure Finder',
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path):
    path = Path(path)
    if not path.exists():
        log.warning(f'Config file {path} not found; using defaults')
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path) as fh:
        cfg = yaml.safe_load(fh) or {}
    return _merge(DEFAULT_CONFIG, cfg)

# ----------------------------------------------------------------------------
# Summaries
# ----------------------------------------------------------------------------

XYZ_HEADER = ['file', 'atom', 'id', 'x', 'y', 'z']
SABC_HEADER = ['atoms', 'depth', 'A', 'B', 'C']


def xyz_rows(imported, digits: int):
    rows = []
    for xyz, name in imported:
        for atom in xyz.atoms:
            x, y, z = srounded(atom.position, digits)
            rows.append({'file': name, 'atom': atom.name, 'id': atom.identifier, 'x': x, 'y': y, 'z': z})
    return rows


def sabc_rows(sabc, digits: int):
    rows = []
    for record in sabc.substituted:
        a, b, c = srounded(record.constants, digits)
        rows.append({'atoms': ' '.join(str(i) for i in record.atom_ids),
                     'depth': depth_for_is_str(record.depth), 'A': a, 'B': b, 'C': c})
    return rows


TEXT_COLUMNS = ('file', 'atom', 'atoms', 'depth')


def print_table(header, rows, nil_string='N/A'):
    """Text columns are left aligned, numbers right aligned."""
    cells = [[nil_string if r.get(key) is None else str(r[key]) for key in header] for r in rows]
    widths = [max([len(key)] + [len(row[i]) for row in cells]) + 2 for i, key in enumerate(header)]
    print(''.join(string_with_space(key, w) for key, w in zip(header, widths)))
    for row in cells:
        print(''.join(string_with_space(value, w, trailing=key in TEXT_COLUMNS)
                      for key, value, w in zip(header, row, widths)))

# ----------------------------------------------------------------------------
# Export
# ----------------------------------------------------------------------------

def export_csv(csv_text: str, file_stem: str, write_dir: Path, cfg: dict):
    out = cfg['output']
    dir_name = appended_unix_time(out['directory_name'], separator=out['separator'])
    created = create_new_directory(dir_name, out.get('subdirectories') or [], write_dir)
    if not created.success:
        log.error(f'Could not create {dir_name} in {write_dir}; nothing saved')
        return None
    target_dir = created.subdirectories[0] if created.subdirectories else created.path
    return write_text(target_dir / f'{file_stem}.csv', csv_text)

# ----------------------------------------------------------------------------
# CLI
# ----------------------------------------------------------------------------

def run(args, cfg):
    mode = ProgramMode(args.mode or cfg['mode'])
    tz = ZoneInfo(cfg['display']['timezone']) if cfg['display'].get('timezone') else None
    out = cfg['output']

    print_welcome_banner(cfg['display']['banner'], debug=args.verbose)
    print(time_now(tz))
    log.info(f'Program mode: {mode.value}')
    started = time.time()

    if args.sabc:
        sabc, file_stem = sabc_file_input()
        print(f'Parent constants: {srounded_string(sabc.original, 4)}')
        header, make_rows, data = SABC_HEADER, sabc_rows, sabc
    else:
        if args.xyz_dir:
            imported = xyz_files_input()
            file_stem = 'xyz_summary'
        else:
            xyz, file_stem = xyz_file_input()
            imported = [(xyz, file_stem)]
        header, make_rows, data = XYZ_HEADER, xyz_rows, imported

    digits = int(out['digits'])
    if mode is ProgramMode.ORDINARY:
        digits = int(input_value('digits after decimal', 'int', default=digits, int_range=(0, 12),
                                 print_after_set=True))

    rows = make_rows(data, digits)
    print()
    print_table(header, rows, out['nil_string'])
    print()

    if mode is ProgramMode.TEST or args.no_export:
        log.info('Export skipped')
    else:
        save_results, write_dir = exporting_path_input('Summary')
        if save_results:
            csv_text = create_csv_string(header, rows, nil_string=out['nil_string'])
            export_csv(csv_text, file_stem, write_dir, cfg)

    print(f'Time used: {time_interval_to_string(time.time() - started)} s')
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='Import molecular structure files and export summaries')
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--mode', choices=[m.value for m in ProgramMode], default=None,
                        help='Program mode (overrides config)')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--xyz', action='store_true', help='Import a single XYZ file (default)')
    source.add_argument('--xyz-dir', action='store_true', help='Import every XYZ file in a directory')
    source.add_argument('--sabc', action='store_true', help='Import an SABC file')
    parser.add_argument('--no-export', action='store_true', help='Do not ask for an exporting path')
    parser.add_argument('--verbose', action='store_true', help='Debug logging, no banner')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    cfg = load_config(Path(args.config))
    try:
        return run(args, cfg)
    except InputAborted as e:
        log.error(str(e))
        sys.exit(1)


if __name__ == '__main__':
    sys.exit(main())
