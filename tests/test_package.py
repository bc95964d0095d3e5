"""Tests for the amimake package namespace."""

import types

import pytest

import amimake


class TestSubmodules:
    """Submodules stay reachable as attributes of the package."""

    @pytest.mark.parametrize(
        "name", ["model", "errors", "source", "detect", "parse", "mapping", "render", "convert"]
    )
    def test_attribute_is_module(self, name):
        assert isinstance(getattr(amimake, name), types.ModuleType)

    def test_from_import_gives_modules(self):
        from amimake import convert, detect, parse, render

        assert callable(detect.detect_lines)
        assert callable(parse.parse_lines)
        assert callable(render.render_text)
        assert callable(convert.convert)


class TestReexports:
    """Tests for names re-exported at package level."""

    def test_reexported_functions(self):
        assert amimake.detect_lines is amimake.detect.detect_lines
        assert amimake.parse_lines is amimake.parse.parse_lines
        assert amimake.render_text is amimake.render.render_text
        assert amimake.main is amimake.convert.main

    def test_version(self):
        assert amimake.__version__ == "0.1.0"
