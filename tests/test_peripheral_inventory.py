"""Testes do parsing do inventário de periféricos."""

from core.services.peripheral_inventory import parse_lsusb, parse_name_list


def test_parse_lsusb_names():
    lines = [
        "Bus 002 Device 001: ID 1d6b:0003 Linux Foundation 3.0 root hub",
        "Bus 001 Device 003: ID 046d:c52b Logitech, Inc. Unifying Receiver",
        "Bus 001 Device 004: ID 0bda:5411",
        "garbage line",
    ]
    assert [p.name for p in parse_lsusb(lines)] == [
        "Linux Foundation 3.0 root hub",
        "Logitech, Inc. Unifying Receiver",
        "USB 0bda:5411",
    ]


def test_parse_name_list_skips_blank_lines():
    lines = ["USB Root Hub (USB 3.0)", "", "   ", "  USB Composite Device  "]
    assert [p.name for p in parse_name_list(lines)] == [
        "USB Root Hub (USB 3.0)",
        "USB Composite Device",
    ]
