"""
Data model for pfShell

Every entity is built once from the configuration export and never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from xml.etree.ElementTree import Element

from pfshell.config import ANY_VALUE


class Severity(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class ConfigDocument:
    """Parsed configuration export."""
    hostname: str
    raw_text: str = field(repr=False)
    path: str = "<string>"
    filter: Optional[Element] = field(default=None, repr=False, compare=False)
    snmp: Optional[Element] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class Endpoint:
    """Source or destination of a rule."""
    value: str = ANY_VALUE
    negated: bool = False
    port: str = ANY_VALUE

    @property
    def is_any(self):
        return self.value == ANY_VALUE

    @property
    def any_port(self):
        return self.port == ANY_VALUE

    @property
    def label(self):
        return f"!{self.value}" if self.negated else self.value


@dataclass(frozen=True)
class Rule:
    """One firewall filter entry, in document order."""
    ordinal: int
    type: str
    interface: str
    ip_protocol: str
    protocol: Optional[str]
    source: Endpoint
    destination: Endpoint
    description: str
    line_number: Optional[int] = None
    disabled: bool = False
    tracker: str = ""


@dataclass(frozen=True)
class SnmpConfig:
    enabled: bool
    sys_location: str = ""
    sys_contact: str = ""
    ro_community: str = ""
    poll_port: str = ""


@dataclass(frozen=True)
class Criterion:
    """A named predicate of the classification catalog."""
    id: str
    severity: Severity
    label: str


@dataclass(frozen=True)
class Finding:
    criterion_id: str
    severity: Severity
    # Back-reference to the classified entity, never a copy
    subject: Union[Rule, SnmpConfig]
