"""
Spreadsheet report for pfShell

One workbook per severity, one worksheet per non-empty criterion group.
"""

import os
import logging
import traceback

from xlsxwriter.exceptions import XlsxWriterException
from xlsxwriter.workbook import Workbook

from pfshell.classifier import criteria_for
from pfshell.config import WORKBOOK_TEMPLATE
from pfshell.errors import SinkWriteError
from pfshell.models import Severity
from pfshell.utils import sheet_name, tabulate_findings

COLUMN_WIDTH = 20


class XlsxReport:
    """
    Writes finding groups to pfAnalysis-<Severity>.xlsx workbooks

    Each workbook is rebuilt on every run, one sheet per non-empty group.
    Workbooks left by an earlier run in the same directory are replaced.
    """

    def __init__(self, output_dir):
        """
        Args:
            output_dir: Directory receiving the workbooks, usually
                Config.output_dir_for(hostname)
        """
        self.output_dir = output_dir

    def workbook_path(self, severity):
        return os.path.join(self.output_dir, WORKBOOK_TEMPLATE.format(severity=severity.value))

    def write(self, findings):
        """
        Write every non-empty finding group.

        A group that cannot be written is logged and counted as failed; the
        remaining groups are still written.

        Returns:
            dict: Statistics about written groups (successful, failed, total)
        """
        stats = {"successful": 0, "failed": 0, "total": 0}

        for severity in Severity:
            groups = [(criterion, findings.get(criterion.id, [])) for criterion in criteria_for(severity)]
            groups = [(criterion, group) for criterion, group in groups if group]
            if not groups:
                continue
            stats["total"] += len(groups)

            try:
                os.makedirs(self.output_dir, exist_ok=True)
            except OSError as e:
                logging.error(f"Could not create output directory {self.output_dir}: {e}")
                stats["failed"] += len(groups)
                continue

            path = self.workbook_path(severity)
            workbook = Workbook(path)
            header_format = workbook.add_format({"bold": True, "bg_color": "#D9D9D9", "border": 1})
            written = 0
            for criterion, group in groups:
                try:
                    self._write_group(workbook, criterion, group, header_format)
                    written += 1
                except SinkWriteError as e:
                    logging.error(f"Could not write findings group {e}")
                    stats["failed"] += 1

            try:
                workbook.close()
            except (XlsxWriterException, OSError) as e:
                logging.error(f"Could not save workbook {path}: {e}")
                logging.debug(f"Full traceback:\n{traceback.format_exc()}")
                stats["failed"] += written
                continue

            stats["successful"] += written
            logging.info(f"✓ Workbook generated: {path} ({written} sheet(s))")

        return stats

    def _write_group(self, workbook, criterion, group, header_format):
        name = sheet_name(criterion.label)
        try:
            worksheet = workbook.add_worksheet(name)
        except XlsxWriterException as e:
            raise SinkWriteError(criterion.id, f"could not add sheet '{name}': {e}") from e

        columns, rows = tabulate_findings(group)
        worksheet.write_row(0, 0, columns, header_format)
        for index, row in enumerate(rows, start=1):
            worksheet.write_row(index, 0, row)
        worksheet.set_column(0, len(columns) - 1, COLUMN_WIDTH)
        logging.debug(f"Sheet '{name}' written with {len(rows)} finding(s)")
