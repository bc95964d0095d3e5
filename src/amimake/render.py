"""
Renders a BuildModel as a build file of a given dialect.

Output layout is the same for every dialect: a two-line header comment,
the variables, then one block per rule with tab-indented recipe lines and
a blank line after each block. Renderer subclasses only choose comment
syntax, pattern-rule syntax and whether double-colon rules survive.
"""

import sys
from pathlib import Path

from amimake.mapping import map_command, map_compiler, map_flags
from amimake.model import BuildModel, Dialect, Rule, Variable, display_name
from amimake.source import encode, write_bytes

TOOL_NAME = "amimake"


def _suffix(pattern: str, default: str) -> str:
    """Extract the file extension of the first word of a pattern ('*.c' -> 'c')."""
    words = pattern.split()
    if not words:
        return default
    head, dot, extension = words[0].rpartition(".")
    if not dot or not extension or "/" in extension or ":" in extension:
        return default
    return extension


def _rule_line(targets: str, separator: str, dependencies: str) -> str:
    if dependencies:
        return f"{targets}{separator} {dependencies}"
    return f"{targets}{separator}"


class DialectRenderer:
    """Shared rendering logic. Subclasses set the class attributes below."""

    dialect = Dialect.UNKNOWN
    title = ""
    comment_prefix = "#"
    suffix_rules = False
    double_colon_rules = False
    empty_rule_note: str | None = None

    def header(self, model: BuildModel) -> list[str]:
        prefix = self.comment_prefix
        return [
            f"{prefix} Converted to {self.title} format from {display_name(model.dialect)}",
            f"{prefix} Generated by {TOOL_NAME}",
        ]

    def render_variable(self, variable: Variable, source: Dialect) -> str:
        name = variable.name
        value = variable.value
        if name.upper() == "CC":
            value = map_compiler(value, source, self.dialect)
        elif name.upper() == "CFLAGS":
            value = map_flags(value, source, self.dialect)
        if variable.append:
            if self.dialect is Dialect.GNU_MAKE:
                return f"{name} += {value}"
            value = f"$({name}) {value}".rstrip()
        return f"{name} = {value}"

    def pattern_header(self, rule: Rule) -> str:
        if self.suffix_rules:
            source_ext = _suffix(rule.dependencies, "c")
            target_ext = _suffix(rule.targets, "o")
            return f".{source_ext}.{target_ext}:"
        targets = rule.targets.replace("*", "%") or "%.o"
        dependencies = rule.dependencies.replace("*", "%") or "%.c"
        return _rule_line(targets, ":", dependencies)

    def rule_header(self, rule: Rule) -> str:
        if rule.is_pattern_rule:
            return self.pattern_header(rule)
        if rule.is_form4 and self.double_colon_rules:
            return _rule_line(f"{rule.targets} ", "::", rule.dependencies)
        return _rule_line(rule.targets, ":", rule.dependencies)

    def render_rule(self, rule: Rule, source: Dialect) -> list[str]:
        lines = [self.rule_header(rule)]
        for command in rule.commands:
            lines.append("\t" + map_command(command.text, source, self.dialect))
        if not rule.commands and self.empty_rule_note:
            lines.append(f"\t{self.comment_prefix} {self.empty_rule_note}")
        lines.append("")
        return lines

    def render(self, model: BuildModel) -> str:
        """Return the complete text of the converted build file."""
        lines = self.header(model)
        lines.append("")

        for variable in model.variables:
            lines.append(self.render_variable(variable, model.dialect))
        if model.variables:
            lines.append("")

        for rule in model.rules:
            lines.extend(self.render_rule(rule, model.dialect))

        return "".join(line + "\n" for line in lines)


class GnuMakeRenderer(DialectRenderer):
    dialect = Dialect.GNU_MAKE
    title = "GNU Make"
    comment_prefix = "#"


class SasCRenderer(DialectRenderer):
    dialect = Dialect.SAS_C
    title = "SAS/C SMakefile"
    comment_prefix = ";"
    suffix_rules = True
    empty_rule_note = "No commands specified - may need manual conversion"


class DiceRenderer(DialectRenderer):
    dialect = Dialect.DICE
    title = "DICE dmakefile"
    comment_prefix = "#"
    double_colon_rules = True


class LatticeRenderer(DialectRenderer):
    dialect = Dialect.LATTICE
    title = "Lattice lmkfile"
    comment_prefix = ";"
    suffix_rules = True


RENDERERS: dict[Dialect, type[DialectRenderer]] = {
    Dialect.GNU_MAKE: GnuMakeRenderer,
    Dialect.SAS_C: SasCRenderer,
    Dialect.DICE: DiceRenderer,
    Dialect.LATTICE: LatticeRenderer,
}


def get_renderer(dialect: Dialect) -> DialectRenderer:
    """Return a renderer for a known dialect."""
    if dialect not in RENDERERS:
        raise ValueError(f"No renderer for dialect {dialect.name}")
    return RENDERERS[dialect]()


def render_text(model: BuildModel, target: Dialect) -> str:
    """Render model as target-dialect text."""
    return get_renderer(target).render(model)


def render(model: BuildModel, target: Dialect, destination: Path | None = None, force: bool = False) -> str:
    """
    Render model and write it out.

    Writes to destination, or to standard output when destination is None.
    The text is rendered completely before anything is written. Returns
    the rendered text; raises DestinationExistsError or
    DestinationUnwritableError on failure.
    """
    text = render_text(model, target)
    if destination is None:
        sys.stdout.write(text)
    else:
        write_bytes(Path(destination), encode(text), force=force)
    return text
