"""Testes do parsing da tabela ARP / neighbor."""

from core.schemas import NeighborEntry
from core.services.neighbor_scanner import (
    parse_arp_table,
    parse_bsd_arp,
    parse_ip_neigh,
)

ARP_OUTPUT = [
    "",
    "Interface: 192.168.1.23 --- 0x7",
    "  Internet Address      Physical Address      Type",
    "  192.168.1.1           14-cc-20-aa-bb-01     dynamic",
    "  192.168.1.40          3c-52-82-00-11-22     dynamic",
    "  192.168.1.255         ff-ff-ff-ff-ff-ff     static",
    "  224.0.0.22            01-00-5e-00-00-16     static",
    "  192.168.1.77          9c-b6-d0-33-44-55     dynamic",
]


def test_single_dynamic_entry_is_extracted():
    lines = [
        "192.168.1.10 aa:bb:cc:dd:ee:01 dynamic",
        "192.168.1.11 static",
    ]
    assert parse_arp_table(lines) == [
        NeighborEntry(ip_address="192.168.1.10", mac_address="aa:bb:cc:dd:ee:01")
    ]


def test_only_dynamic_lines_with_dot_in_input_order():
    entries = parse_arp_table(ARP_OUTPUT)
    assert [e.ip_address for e in entries] == [
        "192.168.1.1",
        "192.168.1.40",
        "192.168.1.77",
    ]
    assert entries[0].mac_address == "14-cc-20-aa-bb-01"


def test_every_entry_comes_from_a_dynamic_line_with_a_dot():
    entries = parse_arp_table(ARP_OUTPUT)
    source_lines = [
        line for line in ARP_OUTPUT if "dynamic" in line and "." in line
    ]
    assert len(entries) == len(source_lines)
    for entry, line in zip(entries, source_lines):
        assert entry.ip_address in line
        assert entry.mac_address in line


def test_dynamic_line_without_dot_is_skipped():
    assert parse_arp_table(["fe80--1 aa-bb dynamic"]) == []


def test_malformed_line_is_skipped_silently():
    assert parse_arp_table(["dynamic.", "   dynamic.   "]) == []


def test_no_deduplication_by_scanner():
    lines = ["10.0.0.5 aa-aa dynamic", "10.0.0.5 aa-aa dynamic"]
    assert len(parse_arp_table(lines)) == 2


def test_ip_neigh_keeps_dynamic_ipv4_states():
    lines = [
        "192.168.15.1 dev wlp2s0 lladdr 14:cc:20:aa:bb:01 REACHABLE",
        "192.168.15.30 dev wlp2s0 lladdr 3c:52:82:00:11:22 STALE",
        "192.168.15.31 dev wlp2s0  FAILED",
        "192.168.15.32 dev wlp2s0 lladdr 3c:52:82:00:11:23 PERMANENT",
        "fe80::1 dev wlp2s0 lladdr 14:cc:20:aa:bb:01 router REACHABLE",
    ]
    assert parse_ip_neigh(lines) == [
        NeighborEntry(ip_address="192.168.15.1", mac_address="14:cc:20:aa:bb:01"),
        NeighborEntry(ip_address="192.168.15.30", mac_address="3c:52:82:00:11:22"),
    ]


def test_bsd_arp_skips_incomplete_and_permanent():
    lines = [
        "? (192.168.0.1) at 14:cc:20:aa:bb:1 on en0 ifscope [ethernet]",
        "? (192.168.0.9) at (incomplete) on en0 ifscope [ethernet]",
        "? (192.168.0.23) at 3c:22:fb:0:11:22 on en0 ifscope permanent [ethernet]",
        "? (192.168.0.42) at 9c:b6:d0:33:44:55 on en0 ifscope [ethernet]",
    ]
    assert [e.ip_address for e in parse_bsd_arp(lines)] == [
        "192.168.0.1",
        "192.168.0.42",
    ]
