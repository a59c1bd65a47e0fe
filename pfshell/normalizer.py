"""
Rule and SNMP normalization for pfShell

Converts raw ``<rule>`` and ``<snmpd>`` elements of a pfSense export into the
canonical Rule and SnmpConfig entities.
"""

import re
import logging

from pfshell.config import ANY_VALUE, SNMP_MIN_COMMUNITY_LENGTH
from pfshell.models import Endpoint, Rule, SnmpConfig
from pfshell.utils import clean_description, has_flag, node_text, normalize_ports

LOWER_RE = re.compile(r"[a-z]")
UPPER_RE = re.compile(r"[A-Z]")
DIGIT_RE = re.compile(r"[0-9]")
SPECIAL_RE = re.compile(r"[^A-Za-z0-9_]")


def normalize_endpoint(node):
    """
    Resolve a <source> or <destination> element.

    Address wins over network; when neither is present the endpoint is the
    wildcard and any negation marker is ignored.
    """
    value = node_text(node, "address") or node_text(node, "network")
    port = normalize_ports(node_text(node, "port"), ANY_VALUE)
    if value is None:
        return Endpoint(value=ANY_VALUE, negated=False, port=port)
    return Endpoint(value=value, negated=has_flag(node, "not"), port=port)


def normalize_rule(node, ordinal, line_number=None):
    """
    Build a Rule from a raw <rule> element.

    Args:
        node: The <rule> element
        ordinal: Position of the rule in the filter section
        line_number: Line of the rule in the original export, if known

    Returns:
        Rule
    """
    return Rule(
        ordinal=ordinal,
        type=node_text(node, "type") or "",
        interface=node_text(node, "interface") or "",
        ip_protocol=node_text(node, "ipprotocol") or "",
        protocol=node_text(node, "protocol"),
        source=normalize_endpoint(node.find("source")),
        destination=normalize_endpoint(node.find("destination")),
        description=clean_description(node.findtext("descr")),
        line_number=line_number,
        disabled=has_flag(node, "disabled"),
        tracker=node_text(node, "tracker") or "",
    )


def normalize_rules(filter_node, line_numbers=None):
    """Normalize every direct <rule> child of the filter section, in document order."""
    if filter_node is None:
        return []
    line_numbers = line_numbers or {}
    rules = [
        normalize_rule(node, ordinal, line_numbers.get(ordinal))
        for ordinal, node in enumerate(filter_node.findall("rule"))
    ]
    logging.debug(f"Normalized {len(rules)} rules")
    return rules


def normalize_snmp(node):
    """Build an SnmpConfig from the <snmpd> element, or None if SNMP is not enabled."""
    if not has_flag(node, "enable"):
        return None
    return SnmpConfig(
        enabled=True,
        sys_location=node.findtext("syslocation") or "",
        sys_contact=node.findtext("syscontact") or "",
        ro_community=node.findtext("rocommunity") or "",
        poll_port=node.findtext("pollport") or "",
    )


def is_secure(community):
    """
    Check the strength of an SNMP community string.

    At least 16 characters, with a lowercase letter, an uppercase letter, a
    digit and a character outside [A-Za-z0-9_]. Every condition is required.
    """
    if community is None or len(community) < SNMP_MIN_COMMUNITY_LENGTH:
        return False
    return bool(
        LOWER_RE.search(community)
        and UPPER_RE.search(community)
        and DIGIT_RE.search(community)
        and SPECIAL_RE.search(community)
    )
