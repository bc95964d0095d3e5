"""
Dialect-neutral build model.

A BuildModel is a faithful transcript of what a dialect parser read:
variables, rules and comments in the order they were encountered.
"""

from dataclasses import dataclass, field
from enum import Enum


class Dialect(Enum):
    """Amiga build-file dialects."""
    GNU_MAKE = "gnu_make"
    SAS_C = "sas_c"
    DICE = "dice"
    LATTICE = "lattice"
    UNKNOWN = "unknown"


# Human-readable names used in headers and messages
DISPLAY_NAMES = {
    Dialect.GNU_MAKE: "GNU Make",
    Dialect.SAS_C: "SAS/C",
    Dialect.DICE: "DICE",
    Dialect.LATTICE: "Lattice",
    Dialect.UNKNOWN: "Unknown",
}

COMMENT_PREFIXES = {
    Dialect.GNU_MAKE: "#",
    Dialect.SAS_C: ";",
    Dialect.DICE: "#",
    Dialect.LATTICE: ";",
}

# Conventional output file name per dialect (Amiga filesystems ignore case)
DEFAULT_FILENAMES = {
    Dialect.GNU_MAKE: "Makefile",
    Dialect.SAS_C: "smakefile",
    Dialect.DICE: "dmakefile",
    Dialect.LATTICE: "lmkfile",
}

# Target used when the caller does not name one
DEFAULT_TARGETS = {
    Dialect.GNU_MAKE: Dialect.SAS_C,
    Dialect.LATTICE: Dialect.SAS_C,
    Dialect.DICE: Dialect.GNU_MAKE,
    Dialect.SAS_C: Dialect.GNU_MAKE,
}

DIALECT_ALIASES = {
    "smake": Dialect.SAS_C,
    "smakefile": Dialect.SAS_C,
    "sasc": Dialect.SAS_C,
    "sas_c": Dialect.SAS_C,
    "sas/c": Dialect.SAS_C,
    "dmake": Dialect.DICE,
    "dmakefile": Dialect.DICE,
    "dice": Dialect.DICE,
    "makefile": Dialect.GNU_MAKE,
    "make": Dialect.GNU_MAKE,
    "gnumakefile": Dialect.GNU_MAKE,
    "gnu": Dialect.GNU_MAKE,
    "gcc": Dialect.GNU_MAKE,
    "gnu_make": Dialect.GNU_MAKE,
    "lmk": Dialect.LATTICE,
    "lmkfile": Dialect.LATTICE,
    "lattice": Dialect.LATTICE,
}


@dataclass
class Variable:
    """A variable assignment. append marks GNU Make's NAME += value."""
    name: str
    value: str
    immediate: bool = False
    append: bool = False


@dataclass
class Command:
    """One recipe line of a rule."""
    text: str
    continuation: bool = False


@dataclass
class Rule:
    """A rule with unparsed target and dependency strings."""
    targets: str
    dependencies: str
    commands: list[Command] = field(default_factory=list)
    is_pattern_rule: bool = False
    is_form4: bool = False


@dataclass
class BuildModel:
    """Everything a parser read from one build file."""
    dialect: Dialect = Dialect.UNKNOWN
    variables: list[Variable] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    filename: str = ""

    @property
    def command_count(self) -> int:
        return sum(len(rule.commands) for rule in self.rules)


def display_name(dialect: Dialect) -> str:
    """Return the human-readable name of a dialect."""
    return DISPLAY_NAMES[dialect]


def parse_dialect_name(name: str) -> Dialect:
    """
    Resolve a user-supplied dialect name.

    Accepts the historical file-type names (smake, dmakefile, lmk, ...)
    as well as the enum member names, case-insensitively.
    Returns Dialect.UNKNOWN for anything else.
    """
    key = name.strip().lower()
    if key in DIALECT_ALIASES:
        return DIALECT_ALIASES[key]
    for dialect in Dialect:
        if dialect is not Dialect.UNKNOWN and key == dialect.name.lower():
            return dialect
    return Dialect.UNKNOWN


def default_target(source: Dialect) -> Dialect:
    """Return the default conversion target for a source dialect."""
    return DEFAULT_TARGETS.get(source, Dialect.UNKNOWN)


def summarize(model: BuildModel) -> str:
    """Generate a brief summary of a parsed model for verbose output."""
    lines = [
        f"Dialect: {display_name(model.dialect)}",
        f"Variables: {len(model.variables)}",
        f"Rules: {len(model.rules)}"
        f" ({sum(1 for r in model.rules if r.is_pattern_rule)} pattern,"
        f" {sum(1 for r in model.rules if r.is_form4)} form4)",
        f"Commands: {model.command_count}",
        f"Comments: {len(model.comments)}",
    ]
    if model.filename:
        lines.insert(0, f"Source: {model.filename}")
    return "\n".join(lines)
