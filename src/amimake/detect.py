"""
Identifies which build-file dialect a file is written in.

Detection is heuristic: each dialect has a handful of signature tokens,
and the first lines of the file are scanned for them. When several
dialects show evidence the most distinctive syntax wins.
"""

import re
from pathlib import Path
from typing import Iterable

from amimake.errors import AmbiguousMakefileError, MakefileNotFoundError
from amimake.model import Dialect
from amimake.source import read_lines

# Number of significant (non-blank, non-comment) lines inspected
DETECTION_LINE_LIMIT = 50

DICE_SIGNATURES = ("%(left)", "%(right)", "::")
GNU_SIGNATURES = ("%.o:", "$@", "$<", "$^")
SAS_SIGNATURES = (".c.o:", "$*.o", "OBJNAME=", "slink")
LATTICE_SIGNATURES = ("blink", "lc ", "WITH")

GNU_COMPILER_ASSIGNMENT = re.compile(r"\bCC\s*=\s*gcc\b")

# Checked in order; earlier dialects win ties
PRECEDENCE = (Dialect.DICE, Dialect.GNU_MAKE, Dialect.SAS_C, Dialect.LATTICE)

# Conventional makefile names, searched in this order
MAKEFILE_NAMES = (
    "makefile",
    "Makefile",
    "MAKEFILE",
    "GNUmakefile",
    "smakefile",
    "SMakefile",
    "SMAKEFILE",
    "dmakefile",
    "Dmakefile",
    "DMAKEFILE",
    "lmkfile",
    "LMKFILE",
)


def is_comment(line: str) -> bool:
    """Check if a trimmed line is a comment in any dialect."""
    return line.startswith(("#", ";"))


def significant_lines(lines: Iterable[str], limit: int = DETECTION_LINE_LIMIT) -> list[str]:
    """Return up to limit trimmed lines that are neither blank nor comments."""
    found = []
    for line in lines:
        trimmed = line.strip()
        if not trimmed or is_comment(trimmed):
            continue
        found.append(trimmed)
        if len(found) >= limit:
            break
    return found


def collect_evidence(lines: Iterable[str]) -> dict[Dialect, bool]:
    """Scan lines and record which dialects show signature syntax."""
    evidence = {dialect: False for dialect in PRECEDENCE}

    for line in significant_lines(lines):
        if any(token in line for token in DICE_SIGNATURES):
            evidence[Dialect.DICE] = True
        if any(token in line for token in GNU_SIGNATURES) or GNU_COMPILER_ASSIGNMENT.search(line):
            evidence[Dialect.GNU_MAKE] = True
        if any(token in line for token in SAS_SIGNATURES):
            evidence[Dialect.SAS_C] = True
        if any(token in line for token in LATTICE_SIGNATURES):
            evidence[Dialect.LATTICE] = True

    return evidence


def detect_lines(lines: Iterable[str]) -> Dialect:
    """Classify build-file lines. Returns Dialect.UNKNOWN without evidence."""
    evidence = collect_evidence(lines)
    for dialect in PRECEDENCE:
        if evidence[dialect]:
            return dialect
    return Dialect.UNKNOWN


def detect(path: Path) -> Dialect:
    """Classify the build file at path."""
    return detect_lines(read_lines(Path(path)))


def find_makefile(directory: Path = Path(".")) -> Path:
    """
    Find the one makefile in a directory.

    Raises MakefileNotFoundError when none of the conventional names
    exist and AmbiguousMakefileError when more than one does. On
    case-insensitive filesystems several names can point at the same
    file; those count once.
    """
    directory = Path(directory)
    found: list[Path] = []

    for name in MAKEFILE_NAMES:
        candidate = directory / name
        if not candidate.is_file():
            continue
        if any(candidate.samefile(existing) for existing in found):
            continue
        found.append(candidate)

    if not found:
        raise MakefileNotFoundError(directory)
    if len(found) > 1:
        raise AmbiguousMakefileError(directory, [p.name for p in found])
    return found[0]
