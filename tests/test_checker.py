"""Integration tests for MetaconfigChecker on realistic hierarchies."""

from metaconfig_check import DiagnosticRegistry
from metaconfig_check import IssueKind
from metaconfig_check import Severity


class TestMetaconfigChecker:
    """End-to-end resolution and analysis of a chip -> genus -> board tree."""

    def test_depth_monotonicity(self, project, checker):
        project.write_import("family-zermatt.metaconfig", "CONFIG_BHK=y")
        project.write_import("genus-zermatt-pro.metaconfig", "!family-zermatt", "CONFIG_BI2C=y")
        doc = project.write_target("zermatt-pro", "!genus-zermatt-pro", "CONFIG_ADC_CAL_LUT_ENABLE=y")

        directives = checker.resolve(doc)

        assert [(d.key, d.depth) for d in directives] == [
            ("CONFIG_BHK", 2),
            ("CONFIG_BI2C", 1),
            ("CONFIG_ADC_CAL_LUT_ENABLE", 0),
        ]
        for directive in directives:
            assert (directive.depth == 0) == (directive.source_file == doc)

    def test_resolve_idempotent(self, project, checker):
        project.write_import("left.metaconfig", "K=1")
        project.write_import("right.metaconfig", "K=2")
        doc = project.write_target("board", "!right", "!left")
        assert checker.resolve(doc) == checker.resolve(doc)

    def test_override_positive(self, project, checker):
        project.write_import("genus.metaconfig", "CONFIG_BI2C_CLOCK_RATE=100000")
        doc = project.write_target("board", "!genus", "-CONFIG_BI2C_CLOCK_RATE", "CONFIG_BI2C_CLOCK_RATE=400000")

        issues = checker.analyze(doc)

        assert not [i for i in issues if i.kind is IssueKind.REDEFINED_WITHOUT_EXCLUSION]
        assert checker.effective_config(doc) == {"CONFIG_BI2C_CLOCK_RATE": "400000"}

    def test_override_negative(self, project, checker):
        genus = project.write_import("genus.metaconfig", "CONFIG_BI2C_CLOCK_RATE=100000")
        doc = project.write_target("board", "!genus", "CONFIG_BI2C_CLOCK_RATE=400000")

        issues = checker.analyze(doc)

        redefined = [i for i in issues if i.kind is IssueKind.REDEFINED_WITHOUT_EXCLUSION]
        assert len(redefined) == 1
        assert redefined[0].file == doc
        assert redefined[0].line == 2
        assert "metaconfig/genus.metaconfig:1)=100000" in redefined[0].message
        assert "target/board/metaconfig:2)=400000" in redefined[0].message
        assert genus.name in redefined[0].message

    def test_unnecessary_redefinition(self, project, checker):
        project.write_import("genus.metaconfig", "CONFIG_BHK=y")
        doc = project.write_target("board", "!genus", "-CONFIG_BHK", "CONFIG_BHK=y")

        issues = checker.analyze(doc)

        assert IssueKind.UNNECESSARY_REDEFINITION in [i.kind for i in issues]
        assert IssueKind.REDEFINED_WITHOUT_EXCLUSION not in [i.kind for i in issues]

    def test_duplicate_via_import(self, project, checker):
        base = project.write_import("base.metaconfig", "CONFIG_FOO=y")
        doc = project.write_target("board", "!base", "CONFIG_FOO=y")

        duplicates = [i for i in checker.analyze(doc) if i.kind is IssueKind.DUPLICATE_LINE]

        assert sorted((i.file, i.line) for i in duplicates) == sorted([(base, 1), (doc, 2)])

    def test_missing_import(self, project, checker):
        doc = project.write_target("board", "!does-not-exist", "CONFIG_FOO=y")

        issues = checker.analyze(doc)

        assert [(i.kind, i.severity) for i in issues] == [(IssueKind.MISSING_IMPORT, Severity.WARNING)]

    def test_cycle(self, project, checker):
        a = project.write_import("a.metaconfig", "!b", "A=1")
        project.write_import("b.metaconfig", "!a", "B=1")

        issues = checker.analyze(a)

        assert [i.kind for i in issues] == [IssueKind.CYCLIC_IMPORT]
        assert [d.key for d in checker.resolve(a)] == ["B", "A"]

    def test_locate_import_target(self, project, checker):
        base = project.write_import("base.metaconfig", "A=1")
        assert checker.locate_import_target("base") == base
        assert checker.locate_import_target("nope") is None

    def test_check_document_annotates_only_open_document(self, project, checker):
        project.write_import("genus.metaconfig", "CONFIG_BHK=y", "CONFIG_BHK=n")
        doc = project.write_target("board", "!genus", "", "CONFIG_BHK=x")

        report = checker.check_document(doc, version=1)

        assert report.document == doc
        assert report.version == 1
        assert [d.line for d in report.diagnostics] == [3]
        assert "Redefined without exclusion." in report.diagnostics[0].message

    def test_check_document_uses_unsaved_text(self, project, checker):
        project.write_import("genus.metaconfig", "CONFIG_BHK=y")
        doc = project.write_target("board", "!genus")

        report = checker.check_document(doc, version=2, text="!genus\nCONFIG_BHK=n\n")

        assert [d.line for d in report.diagnostics] == [2]

    def test_publish_is_version_gated(self, project, checker):
        project.write_import("genus.metaconfig", "CONFIG_BHK=y")
        doc = project.write_target("board", "!genus")
        registry = DiagnosticRegistry()

        newer = checker.check_document(doc, version=2, text="!genus\n")
        older = checker.check_document(doc, version=1, text="!genus\nCONFIG_BHK=n\n")

        assert checker.publish(newer, registry) is True
        assert checker.publish(older, registry) is False
        assert registry.get(doc) == []
        assert registry.version_of(doc) == 2

    def test_diamond_import_has_no_issues(self, project, checker):
        """Test two parents sharing one base do not conflict with themselves."""
        project.write_import("base.metaconfig", "X=1", "-Y")
        project.write_import("left.metaconfig", "!base")
        project.write_import("right.metaconfig", "!base")
        board = project.write_target("board", "!left", "!right")

        assert checker.analyze(board) == []
        assert [(d.key, d.source_line) for d in checker.resolve(board)] == [("X", 1), ("Y", 2)]
        assert checker.effective_config(board) == {"X": "1"}

    def test_effective_config_inclusion_before_exclusion(self, project, checker):
        project.write_import("base.metaconfig", "CONFIG_A=n")
        doc = project.write_target("board", "!base", "CONFIG_A=y", "-CONFIG_A")
        assert checker.effective_config(doc) == {"CONFIG_A": "y"}
