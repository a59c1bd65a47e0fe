"""
pfShell - pfSense configuration auditor
Classifies the filter rules and SNMP settings of a pfSense config.xml export into
High, Medium and Low severity findings.
"""

__version__ = "1.0.0"
__author__ = "pfShell Contributors"

from pfshell.config import Config
from pfshell.classifier import CRITERIA, classify, summarize
from pfshell.loader import load_config, parse_config
from pfshell.normalizer import is_secure, normalize_rule, normalize_rules, normalize_snmp
from pfshell.provenance import map_rule_lines

__all__ = [
    'Config',
    'CRITERIA',
    'classify',
    'summarize',
    'load_config',
    'parse_config',
    'is_secure',
    'normalize_rule',
    'normalize_rules',
    'normalize_snmp',
    'map_rule_lines',
]
