"""
Utility functions for pfShell
"""

import re

from pfshell.config import (
    ANY_VALUE,
    DESCRIPTION_ELLIPSIS,
    DESCRIPTION_MAX_LENGTH,
    DISABLED_LABEL,
    NO_DESCRIPTION_LABEL,
    RULE_COLUMNS,
    SHEET_NAME_INVALID_CHARS,
    SHEET_NAME_MAX_LENGTH,
    SNMP_COLUMNS,
    UNKNOWN_LABEL,
)
from pfshell.models import SnmpConfig


def node_text(node, tag):
    """Stripped text of child ``tag``, or None if the child is missing or empty."""
    if node is None:
        return None
    value = node.findtext(tag)
    if value is None:
        return None
    return value.strip() or None


def has_flag(node, tag):
    """True if the empty marker element ``tag`` (e.g. <enable/>) is present."""
    return node is not None and node.find(tag) is not None


def normalize_ports(port_field, any_value=ANY_VALUE):
    """Normalize port field value."""
    if not port_field:
        return any_value
    return re.sub(r'\s+', '', str(port_field).strip()) or any_value


def clean_description(text):
    """Trim a rule description and cap its length."""
    if text is None:
        return NO_DESCRIPTION_LABEL
    text = text.strip()
    if not text:
        return NO_DESCRIPTION_LABEL
    if len(text) > DESCRIPTION_MAX_LENGTH:
        return text[:DESCRIPTION_MAX_LENGTH] + DESCRIPTION_ELLIPSIS
    return text


def protocol_label(protocol):
    return protocol.upper() if protocol else ANY_VALUE


def format_port(protocol, port):
    """Port text prefixed with the protocol label, e.g. TCP/443."""
    return f"{protocol_label(protocol)}/{port}"


def sheet_name(label):
    """Convert a criterion label to a valid worksheet name."""
    name = "".join(ch for ch in label if ch not in SHEET_NAME_INVALID_CHARS)
    return name[:SHEET_NAME_MAX_LENGTH]


def rule_row(rule):
    """Report row for a rule finding."""
    description = rule.description
    if rule.disabled:
        description = f"{description} | {DISABLED_LABEL}"
    return [
        str(rule.line_number) if rule.line_number is not None else "-",
        rule.interface or UNKNOWN_LABEL,
        rule.type or UNKNOWN_LABEL,
        protocol_label(rule.protocol),
        rule.source.label,
        format_port(rule.protocol, rule.source.port),
        rule.destination.label,
        format_port(rule.protocol, rule.destination.port),
        description,
        rule.tracker or "-",
    ]


def snmp_row(snmp):
    """Report row for an SNMP finding."""
    return [snmp.sys_location, snmp.sys_contact, snmp.ro_community, snmp.poll_port]


def tabulate_findings(group):
    """
    Header and rows for a group of findings of one criterion.

    Returns:
        tuple: (columns, rows)
    """
    if group and isinstance(group[0].subject, SnmpConfig):
        return SNMP_COLUMNS, [snmp_row(finding.subject) for finding in group]
    return RULE_COLUMNS, [rule_row(finding.subject) for finding in group]
