"""
Configuration module for pfShell
"""

import os

# Wildcard sentinel used for addresses, networks and ports
ANY_VALUE = "ANY"

# Rule descriptions
DESCRIPTION_MAX_LENGTH = 50
DESCRIPTION_ELLIPSIS = "..."
NO_DESCRIPTION_LABEL = "No description"

# Classification thresholds
LARGE_PORT_RANGE_THRESHOLD = 1000
SNMP_MIN_COMMUNITY_LENGTH = 16
SNMP_DEFAULT_COMMUNITY = "public"

# Markers used to recover rule line numbers
FILTER_SECTION_TAG = "filter"
RULE_TAG = "rule"

# Output
OUTPUT_DIR_TEMPLATE = "pfShell - {hostname}"
WORKBOOK_TEMPLATE = "pfAnalysis-{severity}.xlsx"
PDF_REPORT_NAME = "pfAnalysis-Summary.pdf"
SHEET_NAME_MAX_LENGTH = 31
SHEET_NAME_INVALID_CHARS = "\\/*[]:?"

# Table columns
RULE_COLUMNS = ["Line", "Interface", "Type", "Protocol", "Source", "Source Port",
                "Destination", "Destination Port", "Description", "Tracker"]
SNMP_COLUMNS = ["Location", "Contact", "RO Community", "Poll Port"]
UNKNOWN_LABEL = "<unknown>"
DISABLED_LABEL = "Rule disabled"


class Config:
    """Runtime configuration for pfShell"""

    def __init__(self, config_path, report=False, pdf=False, output_base=".",
                 debug=False, max_workers=None):
        self.config_path = config_path
        self.report = report
        self.pdf = pdf
        self.output_base = output_base or "."
        self.debug = debug
        self.max_workers = max_workers

    @classmethod
    def from_args(cls, args):
        """Build a Config from parsed command-line arguments."""
        return cls(
            config_path=args.config,
            report=args.report,
            pdf=args.pdf,
            output_base=args.output_base,
            debug=args.debug,
            max_workers=args.workers,
        )

    def output_dir_for(self, hostname):
        """Output directory for reports of the given firewall hostname."""
        return os.path.join(self.output_base, OUTPUT_DIR_TEMPLATE.format(hostname=hostname))
