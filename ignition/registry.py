"""Discovery and bookkeeping of component types declared in a source tree.

Component declarations are found by scanning source files, recorded in a
``components.toml`` registry (mirrored into the temporary directory), and
turned into the accessor names and import lines an engine needs.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
import time as _time
from pathlib import Path
from typing import NamedTuple, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Components = list[tuple[str, str]]

COMPONENTS_FILE = "components.toml"
LOCK_FILE = "components.lock"
SOURCE_DIR = os.path.join(".", "src")

_COMPONENT_LINE = re.compile(r"(.*) = '(.*)'")
_COMPONENT_DECLARATION = re.compile(r".*#\[derive(.*Component.*)\].*\n.*struct (.*)[\{\(]")


class ComponentAccessors(NamedTuple):
    """Names generated for one component type."""

    trait: str
    getter: str
    getter_mut: str


# Files


def tempfile_path() -> Path:
    """Return the path of the registry's copy in the temporary directory."""
    return Path(tempfile.gettempdir()) / COMPONENTS_FILE


def read_components(path: PathLike = COMPONENTS_FILE, fallback: Optional[PathLike] = None) -> str:
    """Return the registry text, trying ``path`` then ``fallback``, else an empty string."""
    candidates = [path, tempfile_path() if fallback is None else fallback]
    for candidate in candidates:
        try:
            return Path(candidate).read_text()
        except OSError:
            continue
    return ""


# Paths


def current_crate(directory: Optional[PathLike] = None) -> str:
    """Return the name of the crate, i.e. the last component of ``directory``."""
    base = Path.cwd() if directory is None else Path(directory)
    return base.name


def _crate_or_current(crate: Optional[str]) -> str:
    return current_crate() if crate is None else crate


def module_path(path: PathLike, crate: Optional[str] = None) -> str:
    """Turn a file path such as ``./src/life/genesis.rs`` into ``crate::life::genesis``."""
    crate = _crate_or_current(crate)
    text = os.fspath(path).replace(os.sep, "/")
    parts = [part for part in text.split("/") if part]
    return (
        "::".join(parts)
        .replace(".::src", crate)
        .replace(".rs", "")
        .replace("::lib", "")
        .replace("::main", "")
    )


def component_module_path(path: PathLike, name: str, crate: Optional[str] = None) -> str:
    """Return the import path of component ``name`` declared in the file at ``path``."""
    return add_component_to_module_path(module_path(path, crate), name)


def add_component_to_module_path(module_path: str, name: str) -> str:
    """Append the component and its accessor trait to a module path."""
    return f"{module_path}::{{{name}, {name}Trait}}"


# Information


def time_of_last_update(text: str, crate: Optional[str] = None) -> int:
    """Return the timestamp of the crate's section in the registry text, or 0."""
    crate = _crate_or_current(crate)
    match = re.search(rf"\[\[{re.escape(crate)}.(\d*)\]\]", text)
    return int(match.group(1)) if match else 0


def components_locked(lock_path: PathLike = LOCK_FILE) -> bool:
    """Take the lock file; return True if someone else already holds it."""
    try:
        with open(lock_path, "x"):
            pass
    except OSError:
        return True
    return False


# Parsing


def parse_components(text: str) -> Components:
    """Return the ``(name, path)`` pairs of every quoted entry in the registry text."""
    return [(match.group(1), match.group(2)) for match in _COMPONENT_LINE.finditer(text)]


def engine_path(text: str, crate: Optional[str] = None) -> str:
    """Return the module path holding the engine, or an empty string if unknown."""
    crate = _crate_or_current(crate)
    match = re.search(rf"(?m)engine = {re.escape(crate)}()$", text)
    if match:
        return f"{crate}{match.group(1)}"
    return ""


def _split_words(segment: str) -> list[str]:
    words: list[str] = []
    current: list[str] = []
    mode: Optional[str] = None
    padded_next = segment[1:] + "\0"
    padded_after = segment[2:] + "\0\0"
    for char, following, after in zip(segment, padded_next, padded_after):
        current.append(char)
        if char.islower():
            mode = "lower"
        elif char.isupper():
            mode = "upper"
        lower_to_upper = mode == "lower" and following.isupper()
        acronym_end = (
            mode == "upper" and char.isupper() and following.isupper() and after.islower()
        )
        if lower_to_upper or acronym_end:
            words.append("".join(current))
            current = []
            mode = None
    if current:
        words.append("".join(current))
    return words


def to_snake_case(name: str) -> str:
    """Convert a type name such as ``RigidBody`` to ``rigid_body``."""
    words = [
        word.lower()
        for segment in re.split(r"[\W_]+", name)
        if segment
        for word in _split_words(segment)
    ]
    return "_".join(words)


def component_accessor_names(name: str) -> ComponentAccessors:
    """Return the trait and accessor names generated for component ``name``."""
    getter = to_snake_case(name)
    return ComponentAccessors(
        trait=f"{name}Trait",
        getter=getter,
        getter_mut=to_snake_case(f"{name}_mut"),
    )


def component_imports(components: Components, text: str, crate: Optional[str] = None) -> list[str]:
    """Return the import lines needed for components not declared beside the engine."""
    crate = _crate_or_current(crate)
    beside_engine = re.compile(rf"{re.escape(engine_path(text, crate))}::\{{.*\}}")
    return [
        f"use {path.replace(crate, 'crate')};"
        for _name, path in components
        if not beside_engine.search(path)
    ]


# Searching


def find_components(source_dir: PathLike = SOURCE_DIR, crate: Optional[str] = None) -> Components:
    """Return every component and the engine declared under ``source_dir``."""
    return scan_dir_for_components(source_dir, crate)


def scan_dir_for_components(directory: PathLike, crate: Optional[str] = None) -> Components:
    """Scan ``directory`` recursively, skipping any ``macros`` directory."""
    crate = _crate_or_current(crate)
    components: Components = []
    with os.scandir(directory) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        if entry.is_file():
            components.extend(components_from_file(entry.path, crate))
        elif entry.name != "macros":
            components.extend(scan_dir_for_components(entry.path, crate))
    return components


def components_from_file(path: PathLike, crate: Optional[str] = None) -> Components:
    """Return the engine marker and component declarations found in one file."""
    crate = _crate_or_current(crate)
    source = Path(path).read_text()
    components: Components = []
    if "engine!(" in source:
        components.append(("engine", module_path(path, crate)))
    for match in _COMPONENT_DECLARATION.finditer(source):
        name = match.group(2).strip(" ")
        components.append((name, f"'{component_module_path(path, name, crate)}'"))
    return components


# Registry file


def format_components(
    components: Components, crate: Optional[str] = None, time: Optional[int] = None
) -> str:
    """Render the crate's registry section, headed by its name and timestamp."""
    crate = _crate_or_current(crate)
    stamp = int(_time.time()) if time is None else time
    body = "\n".join(f"{name} = {path}" for name, path in components)
    return f"[[{crate}.{stamp}]]\n{body}\n"


def replace_components_in_file(old: str, formatted: str, crate: Optional[str] = None) -> str:
    """Replace the crate's section in ``old`` with ``formatted``, or append it."""
    if not old:
        return formatted
    crate = _crate_or_current(crate)
    section = re.compile(rf"\[\[{re.escape(crate)}.\d*\]\]\n(?:.* = .*\n)*")
    if section.search(old):
        return section.sub(lambda _match: formatted, old, count=1)
    return old + "\n" + formatted


def write_component_file(
    text: str, path: PathLike = COMPONENTS_FILE, backup_path: Optional[PathLike] = None
) -> None:
    """Write the registry and copy it to the backup location, logging failures."""
    backup = tempfile_path() if backup_path is None else backup_path
    try:
        Path(path).write_text(text)
    except OSError:
        logger.warning("Unable to write to %s", os.fspath(path))
    try:
        shutil.copyfile(path, backup)
    except OSError:
        logger.warning("Unable to copy list of components to temporary file")


def search_and_rescue_components(
    source_dir: PathLike = SOURCE_DIR,
    components_path: PathLike = COMPONENTS_FILE,
    backup_path: Optional[PathLike] = None,
    crate: Optional[str] = None,
    now: Optional[int] = None,
) -> Optional[Components]:
    """Rescan the sources unless the registry was refreshed in the last two seconds.

    Returns the discovered components (the engine marker excluded), or None
    when the registry is still fresh.
    """
    crate = _crate_or_current(crate)
    now = int(_time.time()) if now is None else now
    backup = tempfile_path() if backup_path is None else backup_path
    old = read_components(components_path, backup)
    if now - time_of_last_update(old, crate) <= 2:
        return None
    components = find_components(source_dir, crate)
    formatted = format_components(components, crate, now)
    write_component_file(replace_components_in_file(old, formatted, crate), components_path, backup)
    return [(name, path) for name, path in components if "'" in path]


def update_components(
    source_dir: PathLike = SOURCE_DIR,
    components_path: PathLike = COMPONENTS_FILE,
    backup_path: Optional[PathLike] = None,
    lock_path: PathLike = LOCK_FILE,
    crate: Optional[str] = None,
    now: Optional[int] = None,
) -> Optional[Components]:
    """Refresh the registry under the lock file; return None if it is locked."""
    if components_locked(lock_path):
        return None
    try:
        return search_and_rescue_components(source_dir, components_path, backup_path, crate, now)
    finally:
        os.remove(lock_path)