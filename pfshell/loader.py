"""
Configuration export loader for pfShell
"""

import os
import logging
import xml.etree.ElementTree as ET

from pfshell.errors import ConfigNotFoundError, ConfigParseError, InvalidConfigError
from pfshell.models import ConfigDocument


def _parse_xml(text):
    # Comments are kept so the re-serialized filter section keeps its line layout
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    parser.feed(text)
    return parser.close()


def parse_config(text, path="<string>"):
    """
    Parse a pfSense configuration export held in memory.

    Args:
        text: Raw XML text of the export
        path: Name used in log and error messages

    Returns:
        ConfigDocument

    Raises:
        ConfigParseError: the text is not well-formed XML
        InvalidConfigError: system/hostname is missing or empty
    """
    try:
        root = _parse_xml(text)
    except ET.ParseError as e:
        raise ConfigParseError(f"Could not parse {path}: {e}") from e

    hostname = (root.findtext("system/hostname") or "").strip()
    if not hostname:
        raise InvalidConfigError(f"No hostname found in {path} (system/hostname is required)")

    filter_node = root.find("filter")
    snmp_node = root.find("snmpd")
    if filter_node is None:
        logging.info(f"No filter section in {path}, no rules to analyze")
    if snmp_node is None:
        logging.debug(f"No snmpd section in {path}")

    return ConfigDocument(
        hostname=hostname,
        raw_text=text,
        path=path,
        filter=filter_node,
        snmp=snmp_node,
    )


def load_config(path):
    """Read and parse the configuration export at ``path``."""
    if not os.path.isfile(path):
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigNotFoundError(f"Could not read configuration file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Could not decode {path}: {e}") from e

    logging.debug(f"Read {len(text)} characters from {path}")
    document = parse_config(text, path)
    logging.info(f"✓ Configuration loaded for host {document.hostname}")
    return document
