"""Testes do passe de discovery (periféricos, gateway e vizinhos)."""

import pytest
from conftest import FakeRunner

from core.schemas import Device, DeviceType
from core.services.command_runner import CommandExecutionError
from core.services.discovery_service import DeviceDiscoveryService
from drivers import UnsupportedProbe, WindowsProbe

CPU_OID = "1.3.6.1.2.1.25.3.3.1.2.1"
MEM_OID = "1.3.6.1.2.1.25.2.3.1.6.1"

IPCONFIG = ("ipconfig",)
ARP = ("arp", "-a")
PNP = WindowsProbe.PERIPHERAL_COMMAND

IPCONFIG_LINES = [
    "Ethernet adapter Ethernet:",
    "   Default Gateway . . . . . . . . . : 192.168.1.1",
]
ARP_LINES = [
    "  192.168.1.1           14-cc-20-aa-bb-01     dynamic",
    "  192.168.1.10          aa-bb-cc-dd-ee-01     dynamic",
    "  192.168.1.255         ff-ff-ff-ff-ff-ff     static",
]
PNP_LINES = ["USB Root Hub (USB 3.0)", "HID Keyboard Device"]


@pytest.fixture
def runner():
    return FakeRunner({IPCONFIG: IPCONFIG_LINES, ARP: ARP_LINES, PNP: PNP_LINES})


@pytest.fixture
def discovery(repository, metrics, runner):
    return DeviceDiscoveryService(repository, metrics, WindowsProbe(runner=runner))


def _by_type(devices, device_type):
    return [d for d in devices if d.device_type is device_type]


def test_full_pass(discovery, repository, snmp_client):
    snmp_client.agents["192.168.1.10"] = {CPU_OID: 23, MEM_OID: 4096}

    devices = discovery.discover()

    peripherals = _by_type(devices, DeviceType.PERIPHERAL)
    assert [d.name for d in peripherals] == PNP_LINES
    assert all(d.ip_address == "N/A" and d.status == "Connected" for d in peripherals)

    (router,) = _by_type(devices, DeviceType.ROUTER)
    assert router.name == "Local Router"
    assert router.ip_address == "192.168.1.1"
    assert router.protocol == "SNMP"

    neighbors = _by_type(devices, DeviceType.NETWORK)
    assert [d.ip_address for d in neighbors] == ["192.168.1.1", "192.168.1.10"]
    assert neighbors[1].name == "Network Device - 192.168.1.10"
    assert neighbors[1].mac_address == "aa-bb-cc-dd-ee-01"
    assert neighbors[1].cpu_usage == 23.0
    assert neighbors[1].memory_usage == 4.0
    # 192.168.1.1 não responde SNMP: métricas zeradas, sem carimbo
    assert neighbors[0].cpu_usage == 0.0
    assert neighbors[0].metrics_updated_at is None

    assert len(repository.find_all()) == len(devices)


def test_single_local_router_across_passes(discovery, repository):
    discovery.discover()
    discovery.discover()

    routers = [
        d for d in repository.find_all() if d.device_type is DeviceType.ROUTER
    ]
    assert len(routers) == 1
    assert routers[0].name == "Local Router"


def test_legacy_local_router_rows_are_removed(discovery, repository):
    legacy = Device(
        name="Local Router",
        ip_address="10.0.0.1",
        device_type=DeviceType.ROUTER,
    )
    repository.save(legacy)

    discovery.discover()

    assert repository.find_by_id(legacy.id) is None
    routers = [
        d for d in repository.find_all() if d.device_type is DeviceType.ROUTER
    ]
    assert [r.ip_address for r in routers] == ["192.168.1.1"]


def test_router_removed_when_gateway_disappears(repository, metrics, runner, discovery):
    discovery.discover()
    runner.outputs[IPCONFIG] = ["Ethernet adapter Ethernet:", "   Default Gateway . . . :"]

    devices = discovery.discover()

    assert _by_type(devices, DeviceType.ROUTER) == []
    assert all(
        d.device_type is not DeviceType.ROUTER for d in repository.find_all()
    )


def test_neighbors_deduplicated_by_ip(discovery, repository):
    discovery.discover()
    discovery.discover()

    network = [
        d for d in repository.find_all() if d.device_type is DeviceType.NETWORK
    ]
    assert sorted(d.ip_address for d in network) == ["192.168.1.1", "192.168.1.10"]
    peripherals = [
        d for d in repository.find_all() if d.device_type is DeviceType.PERIPHERAL
    ]
    assert len(peripherals) == 2


def test_manual_edits_survive_rediscovery(discovery, repository):
    first = discovery.discover()
    neighbor = next(d for d in first if d.ip_address == "192.168.1.10"
                    and d.device_type is DeviceType.NETWORK)
    neighbor.name = "Impressora do 2º andar"
    neighbor.protocol = "NETCONF"
    repository.save(neighbor)

    second = discovery.discover()

    again = next(d for d in second if d.ip_address == "192.168.1.10"
                 and d.device_type is DeviceType.NETWORK)
    assert again.id == neighbor.id
    assert again.name == "Impressora do 2º andar"
    assert again.protocol == "NETCONF"
    # NETCONF simulado no refresh do vizinho
    assert 50.0 <= again.cpu_usage < 60.0


def test_without_deduplication_every_pass_adds_rows(repository, metrics, runner):
    discovery = DeviceDiscoveryService(
        repository, metrics, WindowsProbe(runner=runner), deduplicate=False
    )
    discovery.discover()
    discovery.discover()

    network = [
        d for d in repository.find_all() if d.device_type is DeviceType.NETWORK
    ]
    assert len(network) == 4


def test_failed_gateway_command_keeps_other_steps(repository, metrics, runner):
    runner.outputs[IPCONFIG] = CommandExecutionError("ipconfig falhou")
    discovery = DeviceDiscoveryService(repository, metrics, WindowsProbe(runner=runner))

    devices = discovery.discover()

    assert _by_type(devices, DeviceType.ROUTER) == []
    assert len(_by_type(devices, DeviceType.PERIPHERAL)) == 2
    assert len(_by_type(devices, DeviceType.NETWORK)) == 2


def test_failed_arp_command_keeps_router(repository, metrics, runner):
    del runner.outputs[ARP]
    discovery = DeviceDiscoveryService(repository, metrics, WindowsProbe(runner=runner))

    devices = discovery.discover()

    assert len(_by_type(devices, DeviceType.ROUTER)) == 1
    assert _by_type(devices, DeviceType.NETWORK) == []


def test_unexpected_error_in_peripherals_is_contained(repository, metrics, runner):
    runner.outputs[PNP] = OSError("powershell travou")
    discovery = DeviceDiscoveryService(repository, metrics, WindowsProbe(runner=runner))

    devices = discovery.discover()

    assert _by_type(devices, DeviceType.PERIPHERAL) == []
    assert len(_by_type(devices, DeviceType.ROUTER)) == 1


def test_unsupported_platform_finds_nothing(repository, metrics):
    runner = FakeRunner()
    discovery = DeviceDiscoveryService(
        repository, metrics, UnsupportedProbe(runner=runner)
    )

    assert discovery.discover() == []
    assert runner.calls == []
    assert repository.find_all() == []
