"""
Main execution module for pfShell
"""

import argparse
import logging
import sys

from pfshell import __version__
from pfshell.classifier import classify, summarize
from pfshell.config import Config
from pfshell.console_report import ConsoleReport
from pfshell.errors import ConfigNotFoundError, ConfigParseError, InvalidConfigError
from pfshell.loader import load_config
from pfshell.normalizer import normalize_rules, normalize_snmp
from pfshell.pdf_report import PdfReport
from pfshell.provenance import map_rule_lines
from pfshell.xlsx_report import XlsxReport


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pfshell",
        description="Audit a pfSense configuration export for risky filter rules and SNMP settings.",
    )
    parser.add_argument("config", help="path to the pfSense config.xml export")
    parser.add_argument("-r", "--report", action="store_true",
                        help="also write findings to pfAnalysis-<Severity>.xlsx workbooks")
    parser.add_argument("--pdf", action="store_true",
                        help="also write a PDF summary of the findings")
    parser.add_argument("-o", "--output-base", default=".",
                        help="directory in which the 'pfShell - <hostname>' folder is created")
    parser.add_argument("-w", "--workers", type=int, default=None,
                        help="classify rules in parallel with this many threads")
    parser.add_argument("-d", "--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def analyze(document, max_workers=None):
    """
    Run normalization, line recovery and classification on a loaded document.

    Returns:
        tuple: (rules, snmp, findings)
    """
    line_numbers = map_rule_lines(document.raw_text, document.filter)
    rules = normalize_rules(document.filter, line_numbers)
    snmp = normalize_snmp(document.snmp)
    logging.info(f"Retrieved {len(rules)} rules from {document.path}")
    if snmp is None:
        logging.debug("SNMP is not enabled")

    findings = classify(rules, snmp, max_workers=max_workers)
    return rules, snmp, findings


def main(argv=None):
    """Main execution function."""
    args = build_parser().parse_args(argv)
    config = Config.from_args(args)

    log_level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        document = load_config(config.config_path)
    except (ConfigNotFoundError, ConfigParseError, InvalidConfigError) as e:
        logging.error(str(e))
        return 1

    rules, snmp, findings = analyze(document, max_workers=config.max_workers)
    counts = summarize(findings)
    logging.info("Findings: " + ", ".join(f"{severity.value}={count}" for severity, count in counts.items()))

    ConsoleReport().render(document.hostname, findings)

    output_dir = config.output_dir_for(document.hostname)
    if config.report:
        logging.info(f"Writing spreadsheet reports to {output_dir}...")
        stats = XlsxReport(output_dir).write(findings)
        if stats["successful"] > 0:
            logging.info(f"✓ Successfully wrote {stats['successful']} finding group(s)")
        if stats["failed"] > 0:
            logging.warning(f"⚠ Failed to write {stats['failed']} finding group(s)")

    if config.pdf:
        PdfReport(output_dir).write(document.hostname, findings)

    return 0


if __name__ == "__main__":
    sys.exit(main())
