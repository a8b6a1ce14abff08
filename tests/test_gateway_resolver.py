"""Testes do parsing do gateway padrão (Windows / macOS / Linux)."""

import pytest

from core.services.gateway_resolver import (
    is_dotted_quad,
    parse_ip_route_gateway,
    parse_marker_gateway,
)

IPCONFIG_OUTPUT = [
    "Windows IP Configuration",
    "",
    "Ethernet adapter Ethernet:",
    "",
    "   Connection-specific DNS Suffix  . : lan",
    "   IPv4 Address. . . . . . . . . . . : 192.168.1.23",
    "   Subnet Mask . . . . . . . . . . . : 255.255.255.0",
    "   Default Gateway . . . . : 192.168.1.1",
]


def test_returns_gateway_from_ipconfig():
    assert parse_marker_gateway(IPCONFIG_OUTPUT) == "192.168.1.1"


def test_returns_none_without_gateway_line():
    lines = [line for line in IPCONFIG_OUTPUT if "Default Gateway" not in line]
    assert parse_marker_gateway(lines) is None


def test_empty_output_is_not_found():
    assert parse_marker_gateway([]) is None


@pytest.mark.parametrize(
    "line",
    [
        "   Default Gateway . . . . . . . . . :",
        "   Default Gateway . . . . . . . . . : ",
        "   Default Gateway . . . . . . . . . : gateway.lan",
        "   Default Gateway . . . . . . . . . : 999.168.1.1",
        "   Default Gateway . . . . . . . . . : 192.168.1",
        "   Default Gateway",
    ],
)
def test_malformed_gateway_line_is_not_found(line):
    assert parse_marker_gateway(["Ethernet adapter Ethernet:", line]) is None


def test_skips_disconnected_adapter_and_uses_next_one():
    lines = [
        "Wireless LAN adapter Wi-Fi:",
        "   Default Gateway . . . . . . . . . :",
        "",
        "Ethernet adapter Ethernet:",
        "   Default Gateway . . . . . . . . . : 10.0.0.1",
    ]
    assert parse_marker_gateway(lines) == "10.0.0.1"


def test_dual_stack_continuation_line():
    lines = [
        "   Default Gateway . . . . . . . . . : fe80::1%12",
        "                                       192.168.0.1",
        "   DHCP Server . . . . . . . . . . . : 192.168.0.1",
    ]
    assert parse_marker_gateway(lines) == "192.168.0.1"


def test_macos_route_get_output():
    lines = [
        "   route to: default",
        "destination: default",
        "       mask: default",
        "    gateway: 172.16.0.254",
        "  interface: en0",
    ]
    assert parse_marker_gateway(lines, "gateway") == "172.16.0.254"


def test_linux_ip_route_default():
    lines = [
        "default via 192.168.15.1 dev wlp2s0 proto dhcp src 192.168.15.20 metric 600",
    ]
    assert parse_ip_route_gateway(lines) == "192.168.15.1"


def test_linux_ip_route_without_default_via():
    lines = [
        "default dev tun0 scope link",
        "192.168.15.0/24 dev wlp2s0 proto kernel scope link src 192.168.15.20",
    ]
    assert parse_ip_route_gateway(lines) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("192.168.1.1", True),
        ("0.0.0.0", True),
        ("255.255.255.255", True),
        ("256.1.1.1", False),
        ("1.2.3", False),
        ("1.2.3.4.5", False),
        (" 1.2.3.4", False),
        ("a.b.c.d", False),
    ],
)
def test_is_dotted_quad(value, expected):
    assert is_dotted_quad(value) is expected
