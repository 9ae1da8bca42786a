"""
Console prompt helpers shared by the interactive menu and the commands.
"""

import getpass
from typing import Callable, List, Optional, Sequence, Tuple

Validator = Callable[[str], Optional[str]]


def ask(message: str, validate: Optional[Validator] = None, secret: bool = False,
        default: Optional[str] = None) -> str:
    """
    Prompt until the answer passes ``validate``.

    Args:
        message: Prompt text.
        validate: Returns an error message for bad input, None for good input.
        secret: Read without echo.
        default: Returned for an empty answer.
    """
    suffix = f" [{default}]" if default is not None else ""
    while True:
        prompt = f"{message}{suffix} "
        answer = getpass.getpass(prompt) if secret else input(prompt)
        if not answer and default is not None:
            answer = default
        error = validate(answer) if validate else None
        if error is None:
            return answer
        print(f">> {error}")


def ask_multiline(message: str, validate: Optional[Validator] = None) -> str:
    """Prompt for several lines, terminated by an empty line."""
    while True:
        print(f"{message} (finish with an empty line)")
        lines = []
        while True:
            line = input()
            if not line.strip():
                break
            lines.append(line)
        answer = "\n".join(lines)
        error = validate(answer) if validate else None
        if error is None:
            return answer
        print(f">> {error}")


def ask_int(message: str, default: int, validate: Optional[Callable[[int], Optional[str]]] = None) -> int:
    """Prompt for an integer."""
    while True:
        raw = input(f"{message} [{default}] ").strip()
        try:
            value = int(raw) if raw else default
        except ValueError:
            print(">> Please enter a number!")
            continue
        error = validate(value) if validate else None
        if error is None:
            return value
        print(f">> {error}")


def confirm(message: str, default: bool = True) -> bool:
    """Ask a yes/no question."""
    hint = "Y/n" if default else "y/N"
    answer = input(f"{message} ({hint}) ").strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def choose(message: str, choices: Sequence[Tuple[str, str]]) -> str:
    """
    Show a numbered list and return the value of the picked entry.

    Args:
        message: Question shown above the list.
        choices: (label, value) pairs.
    """
    print(message)
    for number, (label, _) in enumerate(choices, start=1):
        print(f"  {number}. {label}")

    values: List[str] = [value for _, value in choices]
    while True:
        raw = input("> ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(values):
            return values[int(raw) - 1]
        print(f">> Please enter a number between 1 and {len(values)}!")
