# --------------------------------------------------------------
# File: prompts.py
# --------------------------------------------------------------
"""
Interactive console input.

`input_value` asks for one value until it converts to the requested type and
falls inside the optional range. `file_input` wraps it for paths: every
attempt is handed to a caller action that either accepts the path (True),
rejects it quietly (False) or raises, in which case the error is shown and
the user is asked again. The only way out besides valid input is the end of
standard input, reported as `InputAborted`.
"""
import logging
import sys
from datetime import datetime
from typing import Any, Callable, Optional, Tuple

log = logging.getLogger('MolTool.prompts')


class InputAborted(EOFError):
    """Standard input was closed while a prompt was waiting for an answer."""


_CONVERTERS = {
    'int': int,
    'double': float,
}


def input_value(name: str, value_type: str = 'string', default: Any = None,
                int_range: Optional[Tuple[int, int]] = None,
                double_range: Optional[Tuple[float, float]] = None,
                print_after_set: bool = False) -> str:
    """Prompt for `name` until a valid answer is given and return it as text.

    `value_type` is 'string', 'int' or 'double' (case-insensitive, anything
    else is treated as 'string'). Ranges are closed intervals and only apply
    to the matching type. An empty answer picks `default` when there is one.
    Numeric answers are returned stripped; string answers as typed.
    """
    type_code = value_type.lower()
    if default is None:
        prompt = f'Please enter {name}: '
    else:
        prompt = f'Please enter {name} [{default} by default]: '

    while True:
        try:
            response = input(prompt)
        except EOFError:
            raise InputAborted(f'Got no response for {name}. Program exited.') from None

        if default is not None and not response.strip():
            result = str(default)
            break

        converter = _CONVERTERS.get(type_code)
        if converter is None:
            result = response
            break

        text = response.strip()
        try:
            value = converter(text)
        except ValueError:
            print('Wrong format. Please try again.')
            continue

        if type_code == 'double' and double_range is not None:
            low, high = double_range
            if not low <= value <= high:
                print('Out of range. Please try again.')
                continue
        elif type_code == 'int' and int_range is not None:
            low, high = int_range
            if not low <= value <= high:
                print('Out of range. Please try again.')
                continue
        result = text
        break

    if print_after_set:
        print(f'{name} is set as {result}.')
    return result


def file_input(try_action: Callable[[str], bool], name: str = '', message: Optional[str] = None,
               success_message: bool = True) -> None:
    """Ask for a path until `try_action(path)` returns True.

    The typed path is stripped of surrounding whitespace and of backslashes
    (left behind by drag and drop into a terminal). A False return re-prompts
    silently; an exception is printed before re-prompting.
    """
    to_print = message if message is not None else f'{name} path'

    while True:
        file_path = input_value(to_print, 'string').strip().replace('\\', '')
        try:
            passed = try_action(file_path)
        except InputAborted:
            raise
        except Exception as e:
            log.debug(f'Action rejected {file_path!r}: {e}')
            print(f'Error:\n {e}.\n Please try again.')
            continue
        if passed:
            if success_message:
                print(f'Successfully imported from {name}.')
            return


def print_string_in_line(s: str) -> None:
    """Write `s` from the start of the console line (progress style)."""
    sys.stdout.write(s + '\r')
    sys.stdout.flush()


def print_welcome_banner(name: str, year: Optional[int] = None, debug: bool = False) -> None:
    if debug:
        return
    year = year or datetime.now().year
    print()
    print(f'Molecule Tool - {name}')
    print(f'Copyright © 2019-{year}. All rights reserved.')
    print()
