"""
Tests for the console, spreadsheet and PDF reports.
"""
import zipfile

from rich.console import Console

from pfshell.classifier import classify
from pfshell.config import ANY_VALUE
from pfshell.console_report import ConsoleReport
from pfshell.models import Endpoint, Finding, Rule, Severity
from pfshell.pdf_report import PdfReport, finding_line
from pfshell.utils import rule_row, sheet_name
from pfshell.xlsx_report import XlsxReport


def render_text(hostname, findings):
    console = Console(record=True, width=220)
    printed = ConsoleReport(console).render(hostname, findings)
    return printed, console.export_text()


def workbook_xml(path):
    with zipfile.ZipFile(path) as archive:
        return archive.read("xl/workbook.xml").decode("utf-8")


def test_console_report_lists_all_sections(sample_analysis):
    _, _, findings = sample_analysis
    printed, text = render_text("fw1", findings)

    assert printed == 6
    assert "pfShell analysis for fw1" in text
    assert "HIGH SEVERITY FINDINGS" in text
    assert "MEDIUM SEVERITY FINDINGS" in text
    assert "LOW SEVERITY FINDINGS" in text
    assert "Any destination on any port" in text
    assert "TCP/443" in text
    assert "!lan" in text
    assert "public" in text


def test_console_report_omits_empty_severities():
    rule = Rule(
        ordinal=0, type="pass", interface="lan", ip_protocol="inet", protocol=None,
        source=Endpoint(value="lan"), destination=Endpoint(value="10.0.0.10"),
        description="[internal] hosts",
    )
    printed, text = render_text("fw1", classify([rule]))

    assert printed == 1
    assert "MEDIUM SEVERITY FINDINGS" in text
    assert "HIGH SEVERITY FINDINGS" not in text
    assert "LOW SEVERITY FINDINGS" not in text
    assert "[internal] hosts" in text


def test_console_report_without_findings():
    printed, text = render_text("fw1", classify([]))

    assert printed == 0
    assert "SEVERITY FINDINGS" not in text
    assert "No findings" in text


def test_sheet_name_strips_invalid_characters():
    assert sheet_name("a/b\\c*d[e]f:g?h") == "abcdefgh"
    assert sheet_name("x" * 40) == "x" * 31


def test_xlsx_report_writes_one_workbook_per_severity(tmp_path, sample_analysis):
    _, _, findings = sample_analysis
    output_dir = tmp_path / "pfShell - fw1"
    stats = XlsxReport(str(output_dir)).write(findings)

    assert stats == {"successful": 6, "failed": 0, "total": 6}
    for severity in ("High", "Medium", "Low"):
        assert (output_dir / f"pfAnalysis-{severity}.xlsx").is_file()

    assert 'name="Any destination on any port"' in workbook_xml(output_dir / "pfAnalysis-High.xlsx")
    assert 'name="Weak SNMP community string"' in workbook_xml(output_dir / "pfAnalysis-Medium.xlsx")
    assert 'name="Reject rules"' in workbook_xml(output_dir / "pfAnalysis-Low.xlsx")


def test_xlsx_report_skips_empty_severities(tmp_path):
    rule = Rule(
        ordinal=0, type="reject", interface="lan", ip_protocol="inet", protocol="tcp",
        source=Endpoint(value="lan"), destination=Endpoint(value="opt1", port="22"),
        description="ssh",
    )
    stats = XlsxReport(str(tmp_path)).write(classify([rule]))

    assert stats == {"successful": 1, "failed": 0, "total": 1}
    assert (tmp_path / "pfAnalysis-Low.xlsx").is_file()
    assert not (tmp_path / "pfAnalysis-High.xlsx").exists()
    assert not (tmp_path / "pfAnalysis-Medium.xlsx").exists()


def test_xlsx_report_continues_after_group_failure(tmp_path, sample_analysis, monkeypatch):
    _, _, findings = sample_analysis
    # Every group gets the same sheet name, so only the first of each workbook fits
    monkeypatch.setattr("pfshell.xlsx_report.sheet_name", lambda label: "Findings")

    stats = XlsxReport(str(tmp_path)).write(findings)

    assert stats == {"successful": 3, "failed": 3, "total": 6}
    assert (tmp_path / "pfAnalysis-Medium.xlsx").is_file()


def test_xlsx_report_unwritable_output_dir(tmp_path, sample_analysis):
    _, _, findings = sample_analysis
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    stats = XlsxReport(str(blocker)).write(findings)

    assert stats == {"successful": 0, "failed": 6, "total": 6}


def test_pdf_report(tmp_path, sample_analysis):
    _, _, findings = sample_analysis
    report = PdfReport(str(tmp_path / "out"))

    assert report.write("fw1", findings) is True
    with open(report.path, "rb") as f:
        assert f.read(4) == b"%PDF"


def test_pdf_report_failure_is_not_fatal(tmp_path, sample_analysis):
    _, _, findings = sample_analysis
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    assert PdfReport(str(blocker)).write("fw1", findings) is False


def test_any_value_rendered_with_protocol(sample_analysis):
    _, _, findings = sample_analysis
    _, text = render_text("fw1", findings)

    assert f"ANY/{ANY_VALUE}" in text


def test_tracker_is_reported():
    rule = Rule(
        ordinal=3, type="pass", interface="wan", ip_protocol="inet", protocol="tcp",
        source=Endpoint(), destination=Endpoint(value="10.0.0.10", port="22"),
        description="ssh", line_number=42, tracker="1600000000",
    )

    assert rule_row(rule)[-1] == "1600000000"
    assert "[tracker 1600000000]" in finding_line(Finding("AnySrcSpecDestPort", Severity.MEDIUM, rule))


def test_missing_tracker_shown_as_dash(sample_analysis):
    rules, _, _ = sample_analysis

    assert rule_row(rules[0])[-1] == "-"
    assert "tracker" not in finding_line(Finding("AnyDestAnyPort", Severity.HIGH, rules[0]))
