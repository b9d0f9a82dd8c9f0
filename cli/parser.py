"""Command parser for console input."""

import shlex
from typing import Optional

from cli.constants import AUTO_ID
from cli.models import (
    BucketsCommand,
    CommandRequest,
    DeleteCommand,
    GetCommand,
    ListCommand,
    MetaCommand,
    SaveCommand,
    WriteCommand,
    WriteFileCommand,
    WriteFileMultiCommand,
    WriteMultiCommand,
)
from storage_client.models import FileEntry, ObjectEntry


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]
    args = tokens[1:]

    if command_name == "write":
        return _parse_write(args)
    elif command_name == "write-multi":
        return _parse_write_multi(args)
    elif command_name == "write-file":
        return _parse_write_file(args)
    elif command_name == "write-file-multi":
        return _parse_write_file_multi(args)
    elif command_name == "get":
        return _parse_get(args)
    elif command_name == "save":
        return SaveCommand(*_exact(args, 3, "save <bucket> <object-id> <path>"))
    elif command_name == "meta":
        return MetaCommand(*_exact(args, 2, "meta <bucket> <object-id>"))
    elif command_name == "delete":
        return DeleteCommand(*_exact(args, 2, "delete <bucket> <object-id>"))
    elif command_name == "list":
        return ListCommand(*_exact(args, 1, "list <bucket>"))
    elif command_name == "buckets":
        _exact(args, 0, "buckets")
        return BucketsCommand()
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _exact(args: list[str], count: int, usage: str) -> list[str]:
    """Check argument count against a usage line."""
    if len(args) != count:
        raise ParseError(f"Usage: {usage}")
    return args


def _object_id(token: str) -> Optional[str]:
    """Map the auto-id placeholder to None."""
    return None if token == AUTO_ID else token


def _parse_write(args: list[str]) -> WriteCommand:
    """Parse 'write <bucket> <object-id|-> <mime-type> <content>' command."""
    if len(args) != 4:
        raise ParseError("Usage: write <bucket> <object-id|-> <mime-type> <content>")

    bucket, object_id, mime_type, content = args
    return WriteCommand(bucket=bucket, object_id=_object_id(object_id), mime_type=mime_type, content=content)


def _parse_write_multi(args: list[str]) -> WriteMultiCommand:
    """Parse 'write-multi <bucket> <name>=<mime-type>:<content> ...' command."""
    if len(args) < 2:
        raise ParseError("write-multi requires a bucket and at least one <name>=<mime-type>:<content> entry")

    entries = []
    for item in args[1:]:
        name, sep, rest = item.partition("=")
        mime_type, sep2, content = rest.partition(":")
        if not sep or not sep2 or not name or not mime_type:
            raise ParseError(f"Invalid entry '{item}', expected <name>=<mime-type>:<content>")
        entries.append(ObjectEntry(name=name, content=content, mime_type=mime_type))

    return WriteMultiCommand(bucket=args[0], entries=tuple(entries))


def _parse_write_file(args: list[str]) -> WriteFileCommand:
    """Parse 'write-file <bucket> <object-id|-> <path> [mime-type]' command."""
    if len(args) not in (3, 4):
        raise ParseError("Usage: write-file <bucket> <object-id|-> <path> [mime-type]")

    mime_type = args[3] if len(args) == 4 else None
    return WriteFileCommand(bucket=args[0], object_id=_object_id(args[1]), path=args[2], mime_type=mime_type)


def _parse_write_file_multi(args: list[str]) -> WriteFileMultiCommand:
    """Parse 'write-file-multi <bucket> <path>[=<mime-type>] ...' command."""
    if len(args) < 2:
        raise ParseError("write-file-multi requires a bucket and at least one file")

    entries = []
    for item in args[1:]:
        path, sep, mime_type = item.partition("=")
        if not path or (sep and not mime_type):
            raise ParseError(f"Invalid entry '{item}', expected <path>[=<mime-type>]")
        entries.append(FileEntry(path=path, mime_type=mime_type or None))

    return WriteFileMultiCommand(bucket=args[0], entries=tuple(entries))


def _parse_get(args: list[str]) -> GetCommand:
    """Parse 'get <bucket> <object-id> [--with-type] [--etag <etag>]' command."""
    positional = []
    with_type = False
    etag = None

    remaining = iter(args)
    for arg in remaining:
        if arg == "--with-type":
            with_type = True
        elif arg == "--etag":
            etag = next(remaining, None)
            if etag is None:
                raise ParseError("--etag requires a value")
        else:
            positional.append(arg)

    if len(positional) != 2:
        raise ParseError("Usage: get <bucket> <object-id> [--with-type] [--etag <etag>]")

    return GetCommand(bucket=positional[0], object_id=positional[1], with_type=with_type, etag=etag)
