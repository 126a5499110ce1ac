"""List directory entries and search them by name fragment."""

from __future__ import annotations

import argparse
import enum
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    REGULAR = "regular"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    name: str
    kind: EntryKind


def _kind_of(entry: os.DirEntry) -> EntryKind:
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return EntryKind.REGULAR
    return EntryKind.OTHER


def list_entries(dirname: str) -> List[Entry]:
    """Return every entry of a directory, sorted by name."""
    with os.scandir(dirname) as it:
        entries = [Entry(item.name, _kind_of(item)) for item in it]
    return sorted(entries, key=lambda entry: entry.name)


def search_files(dirname: str, pattern: str) -> List[Entry]:
    """Return the directories and regular files whose names contain pattern."""
    return [
        entry
        for entry in list_entries(dirname)
        if pattern in entry.name and entry.kind is not EntryKind.OTHER
    ]


def format_entry(entry: Entry) -> str:
    """Render an entry with a label for its kind."""
    if entry.kind is EntryKind.DIRECTORY:
        return f"目    录: {entry.name}"
    if entry.kind is EntryKind.REGULAR:
        return f"普通文件: {entry.name}"
    return entry.name


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Search a directory for names containing a fragment.")
    parser.add_argument("dirname", nargs="?")
    parser.add_argument("pattern", nargs="?")
    args = parser.parse_args(argv)
    dirname = args.dirname if args.dirname is not None else input("请输入要搜索的目录: ").strip()
    pattern = args.pattern if args.pattern is not None else input("请输入要搜索的文件特征: ").strip()
    try:
        found = search_files(dirname, pattern)
    except OSError as exc:
        print(f"open: {exc}", file=sys.stderr)
        return 1
    for entry in found:
        print(format_entry(entry))
    return 0