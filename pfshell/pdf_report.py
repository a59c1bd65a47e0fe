"""
PDF summary report for pfShell
"""

import os
import logging

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from pfshell.classifier import criteria_for, summarize
from pfshell.config import PDF_REPORT_NAME
from pfshell.models import Rule, Severity

MARGIN = 40
LINE_HEIGHT = 14


def finding_line(finding):
    """One-line summary of a finding for the PDF report."""
    subject = finding.subject
    if isinstance(subject, Rule):
        line = f"line {subject.line_number}" if subject.line_number is not None else "line unknown"
        tracker = f" [tracker {subject.tracker}]" if subject.tracker else ""
        return (f"Rule #{subject.ordinal} ({line}): {subject.type} on {subject.interface} "
                f"{subject.source.label} -> {subject.destination.label}:{subject.destination.port} "
                f"- {subject.description}{tracker}")
    return f"SNMP community '{subject.ro_community}' on port {subject.poll_port or 'default'}"


class PdfReport:
    """Writes a summary of all finding groups to a single PDF"""

    def __init__(self, output_dir):
        self.output_dir = output_dir
        self.path = os.path.join(output_dir, PDF_REPORT_NAME)

    def write(self, hostname, findings):
        """
        Generate the PDF summary.

        Returns:
            bool: True if the PDF was written, False otherwise
        """
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            c = canvas.Canvas(self.path, pagesize=A4)
            width, height = A4
            c.setTitle(f"pfShell analysis for {hostname}")
            y = height - MARGIN

            def write_line(text, font="Helvetica", size=10):
                nonlocal y
                if y < MARGIN:
                    c.showPage()
                    y = height - MARGIN
                c.setFont(font, size)
                c.drawString(MARGIN, y, text[:110])
                y -= LINE_HEIGHT

            write_line(f"pfShell analysis for {hostname}", "Helvetica-Bold", 14)
            counts = summarize(findings)
            write_line(", ".join(f"{severity.value}: {count}" for severity, count in counts.items()))

            for severity in Severity:
                if not counts[severity]:
                    continue
                y -= LINE_HEIGHT
                c.bookmarkPage(severity.value)
                c.addOutlineEntry(f"{severity.value} severity", severity.value, level=0)
                write_line(f"{severity.value.upper()} SEVERITY FINDINGS", "Helvetica-Bold", 12)
                for criterion in criteria_for(severity):
                    group = findings.get(criterion.id, [])
                    if not group:
                        continue
                    write_line(f"{criterion.label} ({len(group)})", "Helvetica-Bold", 10)
                    for finding in group:
                        write_line(f"  {finding_line(finding)}", size=9)

            c.save()
            logging.info(f"✓ PDF generated: {self.path}")
            return True

        except Exception as e:
            logging.error(f"Error generating PDF: {e}")
            return False
