"""Message tree loading from JSON and .properties files.

Builds the nested mapping that MessageFormat.compile() accepts from a set
of files and directories:

- Directories are scanned recursively for files with the accepted
  extensions.
- Each file's path (without extension) is split on the delimiter
  characters; the parts become nested keys, so ``en/user.json`` holding
  ``{"greeting": "Hi"}`` yields ``{"en": {"user": {"greeting": "Hi"}}}``.
- Leading levels with a single key are collapsed, which removes the
  common directory prefix of all files.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

import javaproperties

__all__ = [
    "DEFAULT_DELIMITERS",
    "DEFAULT_EXTENSIONS",
    "load_messages",
    "parse_properties",
    "simplify",
]

logger = logging.getLogger(__name__)

type Tree = dict[str, str | Tree]

DEFAULT_DELIMITERS: str = "._" + os.sep

DEFAULT_EXTENSIONS: tuple[str, ...] = (".json", ".properties")

# Extensions read with the .properties syntax; everything else is JSON.
_PROPERTIES_EXTENSIONS: frozenset[str] = frozenset({".properties", ".ini", ".cfg", ".prefs", ".pro"})


def load_messages(
    paths: Iterable[str | os.PathLike[str]],
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    delimiters: str = DEFAULT_DELIMITERS,
) -> Tree | str:
    """Load a message tree from files and directories.

    Args:
        paths: Files and directories to read
        extensions: Accepted file extensions ('json' and '.json' both work)
        delimiters: Characters that split file paths into keys

    Returns:
        Message tree, or a single pattern if everything collapses to one

    Raises:
        FileNotFoundError: If a path does not exist
        ValueError: If a file has an unaccepted extension, or two files
            map to conflicting keys
    """
    exts = tuple(_normalize_extension(ext) for ext in extensions)
    splitter = _delimiter_pattern(delimiters)
    tree: Tree = {}
    for file in _discover(paths, exts):
        ext = file.suffix
        parts = [part for part in splitter.split(str(file)[: -len(ext)]) if part]
        logger.debug("Loading %s as %s", file, "/".join(parts))
        if ext in _PROPERTIES_EXTENSIONS:
            content: object = parse_properties(_read_text(file), nest="." in delimiters)
        else:
            content = json.loads(file.read_text(encoding="utf-8"))
        _insert(tree, parts, content, file)

    result: Tree | str = tree
    while isinstance(result, dict) and len(result) == 1:
        result = next(iter(result.values()))
    return result


def parse_properties(source: str, *, nest: bool = False) -> Tree:
    """Parse .properties text into a mapping.

    Follows java.util.Properties: '=', ':' and whitespace separators,
    '#' and '!' comments, backslash line continuations and escapes,
    including \\uXXXX.

    Args:
        source: File content
        nest: Split keys on '.' into nested mappings

    Example:
        >>> parse_properties("a.b = x\\nc: y", nest=True)
        {'a': {'b': 'x'}, 'c': 'y'}
    """
    result: Tree = {}
    for key, value in javaproperties.loads(source).items():
        if nest:
            _insert(result, key.split("."), value, None)
        else:
            result[key] = value
    return result


def simplify(tree: Tree) -> Tree:
    """Remove levels where every entry holds the same single key.

    Starting at the root, whenever all mappings at one depth have exactly
    one child key and it is the same key everywhere, that level is
    dropped. Stops at the first depth that contains a pattern.

    Example:
        >>> simplify({"en": {"app": {"a": "A", "b": "B"}}, "fr": {"app": {"a": "A", "b": "B"}}})
        {'en': {'a': 'A', 'b': 'B'}, 'fr': {'a': 'A', 'b': 'B'}}
    """
    result = _copy(tree)
    level = 0
    while True:
        objects = _objects_at(result, level)
        if objects is None:
            return result
        children = [obj[k] for obj in objects for k in obj]
        if not children or not all(isinstance(child, dict) and child for child in children):
            return result
        key0 = next(iter(children[0]))  # type: ignore[arg-type]
        if all(list(child) == [key0] for child in children):  # type: ignore[arg-type]
            for obj in objects:
                for k in obj:
                    obj[k] = obj[k][key0]  # type: ignore[index]
        else:
            level += 1


def _objects_at(tree: Tree, level: int) -> list[Tree] | None:
    objects = [tree]
    for _ in range(level):
        next_level: list[Tree] = []
        for obj in objects:
            for value in obj.values():
                if not isinstance(value, dict):
                    return None
                next_level.append(value)
        objects = next_level
    return objects


def _copy(tree: Tree) -> Tree:
    return {k: _copy(v) if isinstance(v, dict) else v for k, v in tree.items()}


def _insert(tree: Tree, parts: list[str], content: object, file: Path | None) -> None:
    node = tree
    for part in parts[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            msg = f"Key '{part}' is both a message and a group (in {file or 'properties'})"
            raise ValueError(msg)
        node = child
    last = parts[-1] if parts else ""
    existing = node.get(last)
    if existing is None or not (isinstance(existing, dict) or isinstance(content, Mapping)):
        node[last] = content  # type: ignore[assignment]
    elif isinstance(existing, dict) and isinstance(content, Mapping):
        for key, value in content.items():
            _insert(existing, [key], value, file)
    else:
        msg = f"Key '{last}' is both a message and a group (in {file or 'properties'})"
        raise ValueError(msg)


def _discover(paths: Iterable[str | os.PathLike[str]], extensions: tuple[str, ...]) -> list[Path]:
    files: list[Path] = []
    for raw in paths:
        path = Path(raw).resolve()
        if not path.exists():
            msg = f"Input file not found: {path}"
            raise FileNotFoundError(msg)
        if path.is_dir():
            for ext in extensions:
                files.extend(sorted(path.rglob(f"*{ext}")))
        elif path.suffix in extensions:
            files.append(path)
        else:
            msg = f"Unrecognised file extension (expected {', '.join(extensions)}): {path}"
            raise ValueError(msg)
    return files


def _normalize_extension(ext: str) -> str:
    """'json', '.json' and 'messages.json' all mean '.json'."""
    return "." + ext.strip().rpartition(".")[2]


def _delimiter_pattern(delimiters: str) -> re.Pattern[str]:
    chars = set(delimiters)
    if "/" in chars or "\\" in chars:
        chars |= {os.sep}
    return re.compile("[" + "".join(re.escape(c) for c in sorted(chars)) + "]")


def _read_text(file: Path) -> str:
    raw = file.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("%s is not UTF-8, reading as Latin-1", file)
        return raw.decode("latin-1")

