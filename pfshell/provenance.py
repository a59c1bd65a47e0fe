"""
Rule line-number recovery for pfShell

ElementTree does not keep source positions, so the line of each rule in the
original export is recovered by re-serializing the filter section to a scratch
file and aligning the rules found there with the section's first line in the
raw text.

Character references such as &#10; come back as real line breaks when the
section is re-serialized. When the re-serialized section does not span as many
lines as the original one, no rule gets a line number.
"""

import re
import logging
import tempfile
import xml.etree.ElementTree as ET

from pfshell.config import FILTER_SECTION_TAG, RULE_TAG

FILTER_OPEN_RE = re.compile(r"<%s[\s>]" % FILTER_SECTION_TAG)
FILTER_CLOSE_MARKER = "</%s>" % FILTER_SECTION_TAG
RULE_OPEN_RE = re.compile(r"<%s[\s/>]" % RULE_TAG)


def find_section_start(raw_text):
    """Return the 1-based line of the first filter opening tag, or None."""
    for line_number, line in enumerate(raw_text.splitlines(), start=1):
        if FILTER_OPEN_RE.search(line):
            return line_number
    return None


def section_span(lines, start_index=0):
    """Lines between the filter opening tag and its closing tag, or None if unclosed."""
    for index in range(start_index, len(lines)):
        if FILTER_CLOSE_MARKER in lines[index]:
            return index - start_index
    return None


def rule_boundaries(filter_node):
    """
    Relative (start, end) lines of each rule inside the serialized filter section.

    Line 0 is the line holding the filter opening tag. Only direct ``rule``
    children are counted, in document order.
    """
    boundaries = []
    offset = (filter_node.text or "").count("\n")
    for child in filter_node:
        serialized = ET.tostring(child, encoding="unicode")
        tail_lines = (child.tail or "").count("\n")
        total_lines = serialized.count("\n")
        if child.tag == RULE_TAG:
            boundaries.append((offset, offset + total_lines - tail_lines))
        offset += total_lines
    return boundaries


def scan_rule_markers(lines):
    """Relative line of every rule opening tag, in increasing order."""
    occurrences = []
    for index, line in enumerate(lines):
        for _ in RULE_OPEN_RE.finditer(line):
            occurrences.append(index)
    return occurrences


def align(boundaries, occurrences):
    """
    Pair each rule with the next marker that falls within its boundaries.

    Returns:
        dict: ordinal -> relative line, for the rules that could be aligned
    """
    aligned = {}
    cursor = 0
    last_line = 0
    for ordinal, (start, end) in enumerate(boundaries):
        lower = max(start, last_line)
        while cursor < len(occurrences) and occurrences[cursor] < lower:
            cursor += 1
        if cursor < len(occurrences) and occurrences[cursor] <= end:
            last_line = occurrences[cursor]
            aligned[ordinal] = last_line
            cursor += 1
        else:
            logging.debug(f"No line number for rule #{ordinal} (expected between relative lines {start} and {end})")
    return aligned


def map_rule_lines(raw_text, filter_node):
    """
    Recover the original line number of each rule.

    Args:
        raw_text: Raw text of the configuration export
        filter_node: The filter section element, or None

    Returns:
        dict: rule ordinal -> 1-based line number. Rules that could not be
        located are absent from the mapping.
    """
    if filter_node is None:
        return {}

    section_start = find_section_start(raw_text)
    if section_start is None:
        logging.warning("Filter section not found in raw text, rules will have no line numbers")
        return {}

    boundaries = rule_boundaries(filter_node)
    if not boundaries:
        return {}

    try:
        with tempfile.TemporaryFile() as scratch:
            ET.ElementTree(filter_node).write(scratch, encoding="utf-8")
            scratch.seek(0)
            lines = [raw.decode("utf-8", errors="replace") for raw in scratch]
    except OSError as e:
        logging.warning(f"Could not re-serialize filter section: {e}")
        return {}

    raw_span = section_span(raw_text.splitlines(), section_start - 1)
    serialized_span = section_span(lines)
    if raw_span != serialized_span:
        logging.warning(f"Filter section spans {raw_span} lines but {serialized_span} once re-serialized, "
                        f"rules will have no line numbers")
        return {}

    occurrences = scan_rule_markers(lines)
    if len(occurrences) != len(boundaries):
        logging.debug(f"Found {len(occurrences)} rule markers for {len(boundaries)} rules")

    relative = align(boundaries, occurrences)
    mapping = {ordinal: section_start + line for ordinal, line in relative.items()}
    logging.debug(f"Recovered line numbers for {len(mapping)}/{len(boundaries)} rules")
    return mapping
