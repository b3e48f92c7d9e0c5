"""Fixture scripts that record their execution in a journal file.

Each generated script appends its label to the journal, so tests can assert
on the exact apply/revert order.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union


def write_fixture(
    directory: Union[str, Path],
    name: str,
    journal: Union[str, Path],
    *,
    label: Optional[str] = None,
    body: str = "",
) -> Path:
    """Write ``directory/name`` and return its path.

    ``body`` is appended verbatim after the journal write.
    """
    path = Path(directory) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    entry = label if label is not None else Path(name).stem
    path.write_text(
        f"with open({str(journal)!r}, 'a', encoding='utf-8') as fh:\n"
        f"    fh.write({entry!r} + '\\n')\n"
        f"{body}",
        encoding="utf-8",
    )
    return path


def read_journal(journal: Union[str, Path]) -> List[str]:
    p = Path(journal)
    if not p.exists():
        return []
    return p.read_text(encoding="utf-8").splitlines()
