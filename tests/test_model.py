"""Tests for amimake.model module."""

import pytest

from amimake import model
from amimake.model import BuildModel, Command, Dialect, Rule, Variable


# ============================================================================
# Dialect Name Tests
# ============================================================================


class TestParseDialectName:
    """Tests for parse_dialect_name function."""

    @pytest.mark.parametrize("name", ["smake", "smakefile", "sasc", "SASC", "sas_c"])
    def test_sas_aliases(self, name):
        assert model.parse_dialect_name(name) is Dialect.SAS_C

    @pytest.mark.parametrize("name", ["dmake", "dmakefile", "dice", "DICE"])
    def test_dice_aliases(self, name):
        assert model.parse_dialect_name(name) is Dialect.DICE

    @pytest.mark.parametrize("name", ["makefile", "make", "gnumakefile", "gnu", "gcc", "GNU_MAKE"])
    def test_gnu_aliases(self, name):
        assert model.parse_dialect_name(name) is Dialect.GNU_MAKE

    @pytest.mark.parametrize("name", ["lmk", "lmkfile", "lattice", "Lattice"])
    def test_lattice_aliases(self, name):
        assert model.parse_dialect_name(name) is Dialect.LATTICE

    def test_strips_whitespace(self):
        assert model.parse_dialect_name("  dice ") is Dialect.DICE

    def test_unknown_name(self):
        assert model.parse_dialect_name("cmake") is Dialect.UNKNOWN

    def test_unknown_is_not_a_valid_name(self):
        assert model.parse_dialect_name("unknown") is Dialect.UNKNOWN


class TestDefaultTarget:
    """Tests for default_target function."""

    def test_default_pairs(self):
        assert model.default_target(Dialect.GNU_MAKE) is Dialect.SAS_C
        assert model.default_target(Dialect.LATTICE) is Dialect.SAS_C
        assert model.default_target(Dialect.DICE) is Dialect.GNU_MAKE
        assert model.default_target(Dialect.SAS_C) is Dialect.GNU_MAKE

    def test_unknown_has_no_default(self):
        assert model.default_target(Dialect.UNKNOWN) is Dialect.UNKNOWN


class TestDisplayName:
    """Tests for display_name function."""

    def test_names(self):
        assert model.display_name(Dialect.GNU_MAKE) == "GNU Make"
        assert model.display_name(Dialect.SAS_C) == "SAS/C"
        assert model.display_name(Dialect.DICE) == "DICE"
        assert model.display_name(Dialect.LATTICE) == "Lattice"


# ============================================================================
# Model Structure Tests
# ============================================================================


class TestBuildModel:
    """Tests for the BuildModel data structures."""

    def test_empty_model(self):
        m = BuildModel()
        assert m.dialect is Dialect.UNKNOWN
        assert m.variables == []
        assert m.rules == []
        assert m.comments == []

    def test_models_do_not_share_lists(self):
        first = BuildModel()
        second = BuildModel()
        first.variables.append(Variable("CC", "gcc"))
        assert second.variables == []

    def test_rules_do_not_share_commands(self):
        first = Rule("a", "b")
        second = Rule("c", "d")
        first.commands.append(Command("echo"))
        assert second.commands == []

    def test_duplicate_variables_are_kept(self):
        m = BuildModel(variables=[Variable("CC", "gcc"), Variable("CC", "sc")])
        assert [v.value for v in m.variables] == ["gcc", "sc"]

    def test_command_count(self):
        m = BuildModel(rules=[
            Rule("a", "", commands=[Command("x"), Command("y")]),
            Rule("b", "", commands=[Command("z")]),
        ])
        assert m.command_count == 3

    def test_command_defaults(self):
        assert Command("echo").continuation is False

    def test_variable_defaults(self):
        assert Variable("A", "1").immediate is False
        assert Variable("A", "1").append is False


class TestSummarize:
    """Tests for summarize function."""

    def test_counts(self):
        m = BuildModel(
            dialect=Dialect.DICE,
            variables=[Variable("CC", "dcc", immediate=True)],
            rules=[
                Rule("%.o", "%.c", is_pattern_rule=True),
                Rule("clean", "", commands=[Command("delete foo")], is_form4=True),
            ],
            comments=["# hi"],
        )
        summary = model.summarize(m)
        assert "Dialect: DICE" in summary
        assert "Variables: 1" in summary
        assert "Rules: 2 (1 pattern, 1 form4)" in summary
        assert "Commands: 1" in summary
        assert "Comments: 1" in summary

    def test_includes_source_when_known(self):
        m = BuildModel(dialect=Dialect.SAS_C, filename="smakefile")
        assert model.summarize(m).splitlines()[0] == "Source: smakefile"

    def test_omits_source_when_unknown(self):
        assert "Source:" not in model.summarize(BuildModel())
