"""
Classification engine for pfShell

Every rule is tested against every criterion of the catalog. Criteria are
independent: a rule can land in several groups at once.
"""

import re
import logging
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor

from pfshell.config import LARGE_PORT_RANGE_THRESHOLD, SNMP_DEFAULT_COMMUNITY
from pfshell.models import Criterion, Finding, Severity
from pfshell.normalizer import is_secure

PORT_RANGE_RE = re.compile(r"^[^0-9]*([0-9]+)-([0-9]+)$")

CRITERIA = [
    Criterion("AnyDestAnyPort", Severity.HIGH, "Any destination on any port"),
    Criterion("AnySrcDestMultiPort", Severity.HIGH, "Any source to any destination"),
    Criterion("AnySrcSpecDestPort", Severity.MEDIUM, "Any source to specific port"),
    Criterion("AnyDestSpecSrcPort", Severity.MEDIUM, "Any destination from source port"),
    Criterion("AnyPortSpecSrcDest", Severity.MEDIUM, "Any port between specific hosts"),
    Criterion("LargePortRange", Severity.MEDIUM, "Large destination port range"),
    Criterion("RejectRule", Severity.LOW, "Reject rules"),
    Criterion("WeakSnmpCommunity", Severity.MEDIUM, "Weak SNMP community string"),
    Criterion("SnmpBelowV3", Severity.LOW, "SNMP below v3"),
]
CRITERIA_BY_ID = OrderedDict((criterion.id, criterion) for criterion in CRITERIA)


def port_range_span(port):
    """Width of a ``start-end`` port range, or None if ``port`` is not a numeric range."""
    match = PORT_RANGE_RE.match(port or "")
    if not match:
        return None
    start, end = (int(group) for group in match.groups())
    return end - start


def is_large_port_range(rule):
    span = port_range_span(rule.destination.port)
    if span is None:
        if not rule.destination.any_port:
            logging.debug(f"Rule #{rule.ordinal}: port '{rule.destination.port}' is not a numeric range, skipped")
        return False
    return span >= LARGE_PORT_RANGE_THRESHOLD


RULE_PREDICATES = [
    ("AnyDestAnyPort",
     lambda r: r.destination.is_any and r.destination.any_port),
    ("AnySrcDestMultiPort",
     lambda r: r.source.is_any and r.destination.is_any and r.source.any_port),
    ("AnySrcSpecDestPort",
     lambda r: r.source.is_any and not r.destination.is_any and not r.destination.any_port),
    ("AnyDestSpecSrcPort",
     lambda r: r.destination.is_any and not r.source.is_any and not r.source.any_port),
    ("AnyPortSpecSrcDest",
     lambda r: r.destination.any_port and not r.source.is_any and not r.destination.is_any),
    ("LargePortRange", is_large_port_range),
    ("RejectRule",
     lambda r: r.type == "reject"),
]


def is_weak_community(snmp):
    community = snmp.ro_community
    return community == SNMP_DEFAULT_COMMUNITY or not is_secure(community)


def evaluate_rule(rule):
    """Ids of every rule criterion the rule satisfies, in catalog order."""
    return [criterion_id for criterion_id, predicate in RULE_PREDICATES if predicate(rule)]


def _finding(criterion_id, subject):
    return Finding(criterion_id, CRITERIA_BY_ID[criterion_id].severity, subject)


def classify(rules, snmp=None, max_workers=None):
    """
    Classify rules and the SNMP configuration.

    Args:
        rules: Normalized rules
        snmp: SnmpConfig, or None when SNMP is disabled
        max_workers: Evaluate rules in a thread pool of this size when > 1

    Returns:
        OrderedDict: criterion id -> list of Finding, for every criterion of the
        catalog. Rule findings keep the document order of their rules.
    """
    findings = OrderedDict((criterion.id, []) for criterion in CRITERIA)
    rules = sorted(rules, key=lambda rule: rule.ordinal)

    if max_workers and max_workers > 1 and len(rules) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            matches = list(pool.map(evaluate_rule, rules))
    else:
        matches = [evaluate_rule(rule) for rule in rules]

    for rule, criterion_ids in zip(rules, matches):
        for criterion_id in criterion_ids:
            findings[criterion_id].append(_finding(criterion_id, rule))

    if snmp is not None:
        criterion_id = "WeakSnmpCommunity" if is_weak_community(snmp) else "SnmpBelowV3"
        findings[criterion_id].append(_finding(criterion_id, snmp))

    counts = ", ".join(f"{severity.value}={count}" for severity, count in summarize(findings).items())
    logging.debug(f"Classified {len(rules)} rules: {counts}")
    return findings


def criteria_for(severity):
    """Catalog criteria of one severity, in catalog order."""
    return [criterion for criterion in CRITERIA if criterion.severity == severity]


def summarize(findings):
    """Number of findings per severity."""
    counts = OrderedDict((severity, 0) for severity in Severity)
    for criterion_id, group in findings.items():
        counts[CRITERIA_BY_ID[criterion_id].severity] += len(group)
    return counts
