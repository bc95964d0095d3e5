"""
Parses build files into a BuildModel.

All four dialects share one line-oriented state machine; each parser
subclass only supplies the grammar details where its dialect differs
(comment character, suffix-rule markers, double-colon rules, Lattice
WITH blocks and backslash continuation).

Parsing is best-effort: lines that match nothing are dropped, and
entries beyond an optional capacity limit are silently not stored.
Callers that want to know about either can pass an on_diagnostic
callback.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Iterator, NamedTuple

from amimake.model import BuildModel, Command, Dialect, Rule, Variable
from amimake.source import read_lines

# Maximum length of a Lattice line joined from backslash continuations
CONTINUATION_LIMIT = 2048

RECIPE_INDENT = (" ", "\t")


class ParserState(Enum):
    IDLE = "idle"
    IN_RULE = "in_rule"
    IN_WITH_BLOCK = "in_with_block"


class ParseLimits(NamedTuple):
    """Capacity limits. None means unbounded."""
    max_variables: int | None = None
    max_rules: int | None = None
    max_commands: int | None = None
    max_comments: int | None = None
    continuation_length: int = CONTINUATION_LIMIT


class Diagnostic(NamedTuple):
    """Something the parser skipped. kind is dropped, capacity or truncated."""
    line_number: int
    kind: str
    text: str


DiagnosticSink = Callable[[Diagnostic], None]


def _within(count: int, limit: int | None) -> bool:
    return limit is None or count < limit


class DialectParser:
    """Shared state machine. Subclasses set the class attributes below."""

    dialect = Dialect.UNKNOWN
    comment_prefix = "#"
    # Suffix-rule marker -> dependency pattern of the synthesized rule
    suffix_markers: dict[str, str] = {}
    strip_quotes = False
    immediate_variables = False
    double_colon_rules = False
    with_blocks = False

    def __init__(self, limits: ParseLimits | None = None, on_diagnostic: DiagnosticSink | None = None):
        self.limits = limits or ParseLimits()
        self.on_diagnostic = on_diagnostic

    def report(self, line_number: int, kind: str, text: str) -> None:
        if self.on_diagnostic is not None:
            self.on_diagnostic(Diagnostic(line_number, kind, text))

    def logical_lines(self, lines: Iterable[str]) -> Iterator[tuple[int, str]]:
        """Yield (line number, line) pairs to feed the state machine."""
        yield from enumerate(lines, start=1)

    def parse_assignment(self, line: str) -> Variable | None:
        """Parse 'NAME = value'. The name part may not contain a colon."""
        equals = line.find("=")
        if equals <= 0 or ":" in line[:equals]:
            return None
        name = line[:equals].strip()
        value = line[equals + 1 :].strip()
        if not name:
            return None
        return Variable(name=name, value=self.clean_value(value), immediate=self.immediate_variables)

    def clean_value(self, value: str) -> str:
        if self.strip_quotes and len(value) >= 2 and value[0] == value[-1] == '"':
            return value[1:-1]
        return value

    def parse_rule(self, line: str) -> Rule | None:
        """Parse a rule header line, or return None if it is not one."""
        for marker, dependencies in self.suffix_markers.items():
            if marker in line:
                return Rule(targets="*.o", dependencies=dependencies, is_pattern_rule=True)

        if self.double_colon_rules and "::" in line:
            targets, _, dependencies = line.partition("::")
            return Rule(targets=targets.strip(), dependencies=dependencies.strip(), is_form4=True)

        if ":" in line:
            targets, _, dependencies = line.partition(":")
            targets = targets.strip()
            return Rule(targets=targets, dependencies=dependencies.strip(), is_pattern_rule="%" in targets)

        return None

    def add_comment(self, model: BuildModel, number: int, text: str) -> None:
        if _within(len(model.comments), self.limits.max_comments):
            model.comments.append(text)
        else:
            self.report(number, "capacity", text)

    def add_variable(self, model: BuildModel, number: int, variable: Variable) -> None:
        if _within(len(model.variables), self.limits.max_variables):
            model.variables.append(variable)
        else:
            self.report(number, "capacity", f"{variable.name} = {variable.value}")

    def add_rule(self, model: BuildModel, number: int, rule: Rule, text: str) -> Rule | None:
        if _within(len(model.rules), self.limits.max_rules):
            model.rules.append(rule)
            return rule
        self.report(number, "capacity", text)
        return None

    def add_command(self, rule: Rule | None, number: int, text: str) -> None:
        # Recipe of a rule that was not stored goes with it
        if rule is None:
            self.report(number, "capacity", text)
            return
        if _within(len(rule.commands), self.limits.max_commands):
            rule.commands.append(Command(text=text))
        else:
            self.report(number, "capacity", text)

    def parse_lines(self, lines: Iterable[str], model: BuildModel | None = None) -> BuildModel:
        """Run the state machine over lines, populating model."""
        if model is None:
            model = BuildModel()
        model.dialect = self.dialect

        state = ParserState.IDLE
        current: Rule | None = None

        for number, raw in self.logical_lines(lines):
            trimmed = raw.strip()

            if not trimmed:
                state, current = ParserState.IDLE, None
                continue

            if trimmed.startswith(self.comment_prefix):
                self.add_comment(model, number, trimmed)
                continue

            if self.with_blocks and trimmed.upper() == "WITH":
                if current is None and model.rules:
                    current = model.rules[-1]
                state = ParserState.IN_WITH_BLOCK
                continue

            if state is ParserState.IN_WITH_BLOCK:
                # Linker arguments such as FROM lib:c.o are never rules here
                variable = self.parse_assignment(trimmed)
                if variable is not None:
                    self.add_variable(model, number, variable)
                elif current is None:
                    self.report(number, "dropped", trimmed)
                else:
                    self.add_command(current, number, trimmed)
                continue

            if state is ParserState.IN_RULE and raw.startswith(RECIPE_INDENT):
                self.add_command(current, number, trimmed)
                continue

            variable = self.parse_assignment(trimmed)
            if variable is not None:
                self.add_variable(model, number, variable)
                state, current = ParserState.IDLE, None
                continue

            rule = self.parse_rule(trimmed)
            if rule is not None:
                current = self.add_rule(model, number, rule, trimmed)
                state = ParserState.IN_RULE
                continue

            self.report(number, "dropped", trimmed)
            state, current = ParserState.IDLE, None

        return model


class GnuMakeParser(DialectParser):
    dialect = Dialect.GNU_MAKE
    comment_prefix = "#"
    strip_quotes = True

    def parse_assignment(self, line: str) -> Variable | None:
        # := and ?= are plain assignments as far as the model is concerned; += appends
        equals = line.find("=")
        operator = line[equals - 1] if equals > 0 else ""
        if operator in (":", "?", "+") and ":" not in line[: equals - 1]:
            variable = super().parse_assignment(line[: equals - 1] + line[equals:])
            if variable is not None and operator == "+":
                variable.append = True
            return variable
        return super().parse_assignment(line)


class SasCParser(DialectParser):
    dialect = Dialect.SAS_C
    comment_prefix = ";"
    suffix_markers = {".c.o:": "*.c", ".s.o:": "*.s"}


class DiceParser(DialectParser):
    dialect = Dialect.DICE
    comment_prefix = "#"
    immediate_variables = True
    double_colon_rules = True


class LatticeParser(DialectParser):
    dialect = Dialect.LATTICE
    comment_prefix = ";"
    suffix_markers = {".c.o:": "*.c", ".s.o:": "*.s"}
    with_blocks = True

    def logical_lines(self, lines: Iterable[str]) -> Iterator[tuple[int, str]]:
        """Join lines ending in a backslash with the lines that follow."""
        pieces: list[str] = []
        start = 0

        for number, line in enumerate(lines, start=1):
            if not pieces:
                start = number
            stripped = line.rstrip()
            if stripped.endswith("\\"):
                pieces.append(stripped[:-1])
                continue
            pieces.append(line)
            yield start, self.join(start, pieces)
            pieces = []

        if pieces:
            yield start, self.join(start, pieces)

    def join(self, number: int, pieces: list[str]) -> str:
        text = "".join(pieces)
        limit = self.limits.continuation_length
        if len(pieces) > 1 and len(text) > limit:
            self.report(number, "truncated", text[limit:])
            text = text[:limit]
        return text


PARSERS: dict[Dialect, type[DialectParser]] = {
    Dialect.GNU_MAKE: GnuMakeParser,
    Dialect.SAS_C: SasCParser,
    Dialect.DICE: DiceParser,
    Dialect.LATTICE: LatticeParser,
}


def get_parser(
    dialect: Dialect,
    limits: ParseLimits | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> DialectParser:
    """Return a parser for a known dialect."""
    if dialect not in PARSERS:
        raise ValueError(f"No parser for dialect {dialect.name}")
    return PARSERS[dialect](limits=limits, on_diagnostic=on_diagnostic)


def parse_lines(
    lines: Iterable[str],
    dialect: Dialect,
    limits: ParseLimits | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> BuildModel:
    """Parse already-read lines of the given dialect."""
    return get_parser(dialect, limits, on_diagnostic).parse_lines(lines)


def parse(
    path: Path,
    dialect: Dialect,
    limits: ParseLimits | None = None,
    on_diagnostic: DiagnosticSink | None = None,
) -> BuildModel:
    """Read the build file at path and parse it as the given dialect."""
    path = Path(path)
    parser = get_parser(dialect, limits, on_diagnostic)
    model = BuildModel(dialect=dialect, filename=str(path))
    return parser.parse_lines(read_lines(path), model)
