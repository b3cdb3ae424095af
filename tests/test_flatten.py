"""Tests for effective configuration flattening."""

from pathlib import Path

from metaconfig_check import Directive
from metaconfig_check import DirectiveKind
from metaconfig_check import effective_config
from metaconfig_check import parse_directive
from metaconfig_check import precedence_order
from metaconfig_check import render_config

DOC = Path("/work/doc")
BASE = Path("/work/metaconfig/base.metaconfig")


class TestEffectiveConfig:
    """Test effective_config function."""

    def test_empty(self):
        assert effective_config([]) == {}

    def test_shallower_overrides_deeper(self):
        ordered = precedence_order(
            [
                parse_directive("-A", DOC, 1, 0),
                parse_directive("A=2", DOC, 2, 0),
                parse_directive("A=1", BASE, 1, 1),
                parse_directive("B=1", BASE, 2, 1),
            ]
        )
        assert effective_config(ordered) == {"B": "1", "A": "2"}

    def test_exclusion_removes_key(self):
        ordered = precedence_order([parse_directive("A=1", BASE, 1, 1), parse_directive("-A", DOC, 1, 0)])
        assert effective_config(ordered) == {}

    def test_bare_key(self):
        assert effective_config([parse_directive("CONFIG_FLAG", DOC, 1, 0)]) == {"CONFIG_FLAG": ""}

    def test_exclusions_apply_before_inclusions_of_same_depth(self):
        """Test a file that includes a key and later excludes it keeps the inclusion."""
        ordered = precedence_order(
            [
                parse_directive("CONFIG_A=n", BASE, 1, 1),
                parse_directive("CONFIG_A=y", DOC, 2, 0),
                parse_directive("-CONFIG_A", DOC, 3, 0),
            ]
        )
        assert effective_config(ordered) == {"CONFIG_A": "y"}

    def test_comments_skipped(self):
        ordered = [
            Directive(DOC, 1, 0, DirectiveKind.COMMENT, "A", "1", "#A=1"),
            parse_directive("B=2", DOC, 2, 0),
        ]
        assert effective_config(ordered) == {"B": "2"}


class TestRenderConfig:
    """Test render_config function."""

    def test_render(self):
        assert render_config({"A": "1", "FLAG": "", "URL": "x=y"}) == "A=1\nFLAG\nURL=x=y\n"

    def test_render_empty(self):
        assert render_config({}) == ""
