"""Remembering a command as the default for an output directory.

Running with ``--remember`` stores the current command. The stored command
is used whenever the program later runs in the same output directory without
any datatypes given; extra arguments given then override the stored ones.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Sequence, Union

from .args import Args
from .parse_utils import ParseError
from .version import get_version

REMEMBER_FILENAME = "remembered_command.json"


@dataclass
class RememberedCommand:
    """A stored command together with the version that stored it."""

    cryo_version: str
    command: List[str] = field(default_factory=list)
    args: Args = field(default_factory=Args)


def get_remembered_command_path(cryo_dir: Union[str, Path]) -> Path:
    """Path of the remembered command file inside ``cryo_dir``."""
    return Path(cryo_dir) / REMEMBER_FILENAME


def save_remembered_command(
    cryo_dir: Union[str, Path], args: Args, argv: Sequence[str]
) -> None:
    """Store ``args`` and the words of ``argv`` (minus ``--remember``)."""
    remembered = RememberedCommand(
        cryo_version=get_version(),
        command=[word for word in argv if word != "--remember"],
        args=replace(args, remember=False),
    )
    payload = {
        "cryo_version": remembered.cryo_version,
        "command": remembered.command,
        "args": remembered.args.to_dict(),
    }
    try:
        text = json.dumps(payload)
    except (TypeError, ValueError):
        raise ParseError("could not serialize remembered command") from None

    path = get_remembered_command_path(cryo_dir)
    try:
        handle = path.open("w", encoding="utf-8")
    except OSError:
        raise ParseError("could not create remembered file") from None
    with handle:
        try:
            handle.write(text)
        except OSError:
            raise ParseError("could not write remembered command") from None


def load_remembered_command(cryo_dir: Union[str, Path]) -> RememberedCommand:
    """Load the command stored in ``cryo_dir``."""
    path = get_remembered_command_path(cryo_dir)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError:
        raise ParseError(
            "either 1) specify datasets to collect or "
            "2) specify a command to remember with --remember"
        ) from None
    with handle:
        try:
            contents = handle.read()
        except (OSError, UnicodeDecodeError):
            raise ParseError("could not read rememebered file") from None

    try:
        data = json.loads(contents)
        command = data["command"]
        version = data["cryo_version"]
        if not isinstance(command, list) or not isinstance(version, str):
            raise TypeError("bad remembered command")
        args = Args.from_dict(data["args"])
    except (ValueError, TypeError, KeyError, AttributeError, ParseError):
        raise ParseError("could not deserialize remembered file") from None
    return RememberedCommand(cryo_version=version, command=[str(w) for w in command], args=args)