"""
Pytest configuration and fixtures.
"""
import pytest

from pfshell.loader import parse_config
from pfshell.main import analyze


# Sample pfSense export. Rules start on lines 9, 22 and 36.
SAMPLE_CONFIG = """<?xml version="1.0"?>
<pfsense>
    <version>21.7</version>
    <system>
        <hostname>fw1</hostname>
        <domain>example.lan</domain>
    </system>
    <filter>
        <rule>
            <type>pass</type>
            <interface>lan</interface>
            <ipprotocol>inet</ipprotocol>
            <source>
                <any></any>
            </source>
            <destination>
                <any></any>
            </destination>
            <descr><![CDATA[Default allow LAN to any rule]]></descr>
        </rule>
        <!-- web access -->
        <rule>
            <type>pass</type>
            <interface>wan</interface>
            <ipprotocol>inet</ipprotocol>
            <protocol>tcp</protocol>
            <source>
                <any></any>
            </source>
            <destination>
                <address>10.0.0.10</address>
                <port>443</port>
            </destination>
            <descr><![CDATA[HTTPS to web server]]></descr>
        </rule>
        <rule>
            <type>reject</type>
            <interface>lan</interface>
            <ipprotocol>inet</ipprotocol>
            <protocol>udp</protocol>
            <source>
                <network>lan</network>
                <not></not>
            </source>
            <destination>
                <network>opt1</network>
                <port>10000-11000</port>
            </destination>
        </rule>
    </filter>
    <snmpd>
        <syslocation>DC1</syslocation>
        <syscontact>noc@example.lan</syscontact>
        <rocommunity>public</rocommunity>
        <pollport>161</pollport>
        <enable></enable>
    </snmpd>
</pfsense>
"""

SAMPLE_RULE_LINES = [9, 22, 36]


@pytest.fixture
def sample_text():
    return SAMPLE_CONFIG


@pytest.fixture
def sample_document():
    return parse_config(SAMPLE_CONFIG, "config.xml")


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "config.xml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def sample_analysis(sample_document):
    """(rules, snmp, findings) for the sample export."""
    return analyze(sample_document)


@pytest.fixture
def sample_rule_lines():
    return list(SAMPLE_RULE_LINES)
