# --------------------------------------------------------------
# File: utils.py
# --------------------------------------------------------------
"""
String formatting, time stamps and directory helpers shared by the
interactive tools and the auxiliary scripts.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

import numpy as np

log = logging.getLogger('MolTool.utils')

_MONTHS = ('January', 'February', 'March', 'April', 'May', 'June', 'July',
           'August', 'September', 'October', 'November', 'December')


# ----------------------------------------------------------------------------
# Padding and rounding
# ----------------------------------------------------------------------------

def string_with_space(s: str, tot_space: int, trailing: bool = True) -> str:
    """Pad `s` with spaces up to `tot_space` characters.

    Strings already at least `tot_space` long are returned unchanged.
    """
    if tot_space < len(s):
        return s
    pad = ' ' * (tot_space - len(s))
    return s + pad if trailing else pad + s


def to_print_with_space(item: Any, tot_space: int, trailing: bool = True) -> str:
    return string_with_space(str(item), tot_space, trailing=trailing)


def srounded(value, digits_after_decimal: int, option: str = 'f'):
    """Format a number with a fixed number of digits after the decimal point.

    A sequence (or numpy array) gives back a list with one string per element.
    `option` is the printf conversion character ('f', 'e', 'g', ...).
    """
    fmt = f'%.{digits_after_decimal}{option}'
    if isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, str) and np.ndim(value) > 0:
        return [fmt % float(v) for v in np.ravel(value)]
    return fmt % value


def srounded_string(values, digits_after_decimal: int, option: str = 'f') -> str:
    return '[' + ', '.join(srounded(list(values), digits_after_decimal, option)) + ']'


# ----------------------------------------------------------------------------
# CSV text
# ----------------------------------------------------------------------------

def create_csv_string(header: List[str], data: Iterable[Dict[str, Any]], nil_string: str = 'N/A') -> str:
    """Build CSV text: header row first, then one row per mapping.

    Values are written with str(); nothing is quoted, so values holding
    commas break the column layout.
    """
    lines = [','.join(header)]
    for row in data:
        lines.append(','.join(str(row[key]) if key in row and row[key] is not None else nil_string
                              for key in header))
    return '\n'.join(lines) + '\n'


# ----------------------------------------------------------------------------
# Time helpers
# ----------------------------------------------------------------------------

def _unix_seconds(moment: Union[datetime, float, None]) -> int:
    if moment is None:
        return int(datetime.now(timezone.utc).timestamp())
    if isinstance(moment, datetime):
        return int(moment.timestamp())
    return int(moment)


def appended_unix_time(s: str, moment: Union[datetime, float, None] = None, separator: str = '_') -> str:
    """Return `s` followed by `separator` and the unix time in whole seconds."""
    return s + separator + str(_unix_seconds(moment))


def time_interval_to_string(interval: Union[float, timedelta]) -> str:
    """Elapsed time as whole seconds, e.g. '1421'."""
    if isinstance(interval, timedelta):
        interval = interval.total_seconds()
    return str(int(interval))


def display_time(moment: datetime, tz=None) -> str:
    """Long US-English date and time, e.g. 'October 19, 2026 at 3:04:05 PM UTC'.

    `tz` is any tzinfo; None means the local time zone. Month names are fixed
    so the output does not depend on the process locale.
    """
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(tz)
    hour = moment.hour % 12 or 12
    meridiem = 'AM' if moment.hour < 12 else 'PM'
    zone = moment.tzname() or ''
    text = (f'{_MONTHS[moment.month - 1]} {moment.day}, {moment.year} at '
            f'{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}')
    return f'{text} {zone}'.rstrip()


def time_now(tz=None) -> str:
    return display_time(datetime.now(timezone.utc), tz=tz)


# ----------------------------------------------------------------------------
# Directories
# ----------------------------------------------------------------------------

def ensure_dirs(*dirs):
    for d in dirs:
        Path(d).mkdir(parents=True, exist_ok=True)


@dataclass
class DirectoryCreation:
    """Outcome of create_new_directory.

    On failure `path` is the base path and `subdirectories` is padded with
    copies of it, one entry per requested name. `created` only lists the
    subdirectories that really exist.
    """
    path: Path
    subdirectories: List[Path]
    success: bool
    created: List[Path] = field(default_factory=list)


def create_new_directory(name: str, sub_directories: Sequence[str] = (), base_path: Union[str, Path] = '.',
                         parents: bool = False) -> DirectoryCreation:
    """Create `base_path/name` and then each `base_path/name/<sub>` in order.

    An existing directory counts as a failure. Errors are printed and logged,
    never raised.
    """
    base_path = Path(base_path)
    created: List[Path] = []
    try:
        new_dir = base_path / name
        new_dir.mkdir(parents=parents, exist_ok=False)
        log.info(f'Created directory {new_dir}')
        for sub_name in sub_directories:
            sub_path = new_dir / sub_name
            sub_path.mkdir(parents=parents, exist_ok=False)
            created.append(sub_path)
        return DirectoryCreation(new_dir, list(created), True, created)
    except (OSError, ValueError) as e:
        print(f'An error occurred when creating a new directory: {e}.')
        log.error(f'Directory creation under {base_path} failed: {e}')
    padded = list(created) + [base_path] * (len(sub_directories) - len(created))
    return DirectoryCreation(base_path, padded, False, created)


def write_text(path: Path, text: str) -> Path:
    path = Path(path)
    with open(path, 'w') as fh:
        fh.write(text)
    log.info(f'Wrote {path}')
    return path
