from serialscope.models.baseline import BaselineSnapshot
from serialscope.models.snapshot import SnapshotModel
from serialscope.snapshot.parser import parse
from serialscope.snapshot.serializer import serialize
from tests.data.serialscope.inventory import EXPORT_TEXT


def test_parse_export():
    baseline = parse(EXPORT_TEXT)

    assert baseline == BaselineSnapshot(
        system_serial="PF3ABCDE",
        system_uuid="4C4C4544-0046-3310-8041-C4C04F334344",
        system_sku="0A1B",
        baseboard_serial="/PF3ABCDE/CNCMK0012300A3/",
        processor_serial=None,
        chassis_serial=None,
        disk_serials=("S5GXNF0R123456", "WD-WX12D80ABCDE"),
        network_macs=("8C:EC:4B:11:22:33", "DC:21:5C:44:55:66"),
        monitor_serials=("7YQ2J83",),
        gpu_guids=("{4d36e968-e325-11ce-bfc1-08002be10318}",),
    )


def test_scalar_round_trip_drops_sentinels():
    snapshot = SnapshotModel(
        system_serial="ABC123",
        system_uuid="N/A",
        system_sku="SKU-9",
        baseboard_serial="BB-1",
        processor_serial="N/A",
        chassis_serial="CH-7",
    )

    baseline = parse(serialize(snapshot))

    assert baseline.system_serial == "ABC123"
    assert baseline.system_sku == "SKU-9"
    assert baseline.baseboard_serial == "BB-1"
    assert baseline.chassis_serial == "CH-7"
    assert baseline.system_uuid is None
    assert baseline.processor_serial is None
    assert baseline.disk_serials == ()


def test_parse_empty_and_garbage_input():
    assert parse("") == BaselineSnapshot()
    assert parse("no colon here\n\x00\x01 binary\n=== ===\n:::\n") == BaselineSnapshot()


def test_parse_last_write_wins_and_sections_may_repeat():
    content = (
        "=== SYSTEM ===\n"
        "Serial Number: FIRST\n"
        "=== NETWORK ===\n"
        "eth0: AA:AA:AA:AA:AA:AA\n"
        "=== SYSTEM ===\n"
        "Serial Number: SECOND\n"
        "=== NETWORK ===\n"
        "eth1: BB:BB:BB:BB:BB:BB\n"
    )

    baseline = parse(content)

    assert baseline.system_serial == "SECOND"
    assert baseline.network_macs == ("AA:AA:AA:AA:AA:AA", "BB:BB:BB:BB:BB:BB")


def test_parse_skips_empty_and_sentinel_values():
    content = "=== SYSTEM ===\nSerial Number:\nUUID: N/A\nSKU:   \n"
    assert parse(content) == BaselineSnapshot()


def test_parse_ignores_keys_outside_their_section():
    content = (
        "Serial Number: ORPHAN\n"
        "=== BASEBOARD ===\n"
        "UUID: NOT-A-BASEBOARD-KEY\n"
        "Asset Tag: TAG\n"
        "=== DISKS ===\n"
        "Disk 1: Samsung\n"
        "  WWN: eui.1\n"
        "=== MONITORS ===\n"
        "  ID Serial: DEL4254\n"
        "=== GPU ===\n"
        "  PCI Device: PCI\\VEN_10DE\n"
        "=== BIOS ===\n"
        "Serial Number: IGNORED\n"
    )

    assert parse(content) == BaselineSnapshot()


def test_parse_tolerates_indentation_and_crlf():
    content = "  === CHASSIS ===  \r\n    Serial Number :  CH-7  \r\n"
    assert parse(content).chassis_serial == "CH-7"


def test_parse_truncated_file_keeps_what_was_written():
    truncated = EXPORT_TEXT[: EXPORT_TEXT.index("=== DISKS ===") + 20]

    baseline = parse(truncated)

    assert baseline.system_serial == "PF3ABCDE"
    assert baseline.disk_serials == ()
    assert baseline.network_macs == ()
