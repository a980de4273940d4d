# -----------------------------
# File: scripts/xyz_dir_to_csv.py
# -----------------------------
"""
AUXILIARY SCRIPT
Write a CSV summary (one row per atom) of every .xyz file in a directory,
without any prompt.
Usage:
  python scripts/xyz_dir_to_csv.py --xyz-dir data/structures/ --out summaries/structures.csv --digits 4
"""

import argparse
from pathlib import Path

from molecule_tool import XYZ_HEADER, xyz_rows
from structure_io import XYZFile, last_path_component_name
from utils import create_csv_string, ensure_dirs, write_text


def collect(xyz_dir: Path):
    imported = []
    for f in sorted(p for p in Path(xyz_dir).iterdir() if p.suffix == '.xyz'):
        xyz = XYZFile.from_path(f)
        if xyz.atoms:
            imported.append((xyz, last_path_component_name(f)))
    return imported


def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument('--xyz-dir', required=True)
    p.add_argument('--out', required=True)
    p.add_argument('--digits', type=int, default=6)
    p.add_argument('--nil', default='N/A')
    args = p.parse_args(argv)

    imported = collect(Path(args.xyz_dir))
    out = Path(args.out)
    ensure_dirs(out.parent)
    write_text(out, create_csv_string(XYZ_HEADER, xyz_rows(imported, args.digits), nil_string=args.nil))
    print(f'Summarised {len(imported)} files into {out}')
    return 0


if __name__ == '__main__':
    main()
