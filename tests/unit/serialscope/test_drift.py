import pytest

from serialscope.drift import Category
from serialscope.drift import DriftComparator
from serialscope.models.baseline import BaselineSnapshot
from serialscope.models.snapshot import DiskEntry
from serialscope.models.snapshot import NetworkInterface
from serialscope.models.snapshot import SnapshotModel
from serialscope.models.status import SerialStatus
from serialscope.snapshot.parser import parse
from tests.data.serialscope.inventory import EXPORT_TEXT


def test_compare_scalar():
    unchanged = DriftComparator(BaselineSnapshot(system_serial="ABC123"))
    changed = DriftComparator(BaselineSnapshot(system_serial="OLD999"))
    empty = DriftComparator(BaselineSnapshot())

    assert unchanged.compare_scalar("system_serial", "ABC123") == SerialStatus.unchanged()
    assert changed.compare_scalar("system_serial", "ABC123") == SerialStatus.changed("OLD999")
    assert empty.compare_scalar("system_serial", "ABC123") == SerialStatus.new()


@pytest.mark.parametrize("current", ["", "N/A"])
def test_compare_scalar_without_live_value_is_new(current):
    comparator = DriftComparator(BaselineSnapshot(chassis_serial="CH-7"))
    assert comparator.compare_scalar(Category.CHASSIS_SERIAL, current) == SerialStatus.new()


def test_compare_scalar_is_case_sensitive():
    comparator = DriftComparator(BaselineSnapshot(system_uuid="abc-def"))
    assert comparator.compare_scalar(Category.SYSTEM_UUID, "ABC-DEF") == SerialStatus.changed("abc-def")


def test_compare_list():
    comparator = DriftComparator(BaselineSnapshot(disk_serials=("SN-1", "SN-42")))
    other = DriftComparator(BaselineSnapshot(disk_serials=("SN-1", "SN-2")))
    empty = DriftComparator(BaselineSnapshot())

    assert comparator.compare_list("disk", "SN-42") == SerialStatus.unchanged()
    assert other.compare_list("disk", "SN-42") == SerialStatus.changed("(different from previous)")
    assert empty.compare_list("disk", "SN-42") == SerialStatus.new()


def test_compare_list_ignores_position():
    comparator = DriftComparator(BaselineSnapshot(gpu_guids=("{b}", "{a}")))
    assert comparator.compare_list(Category.GPU, "{a}") == SerialStatus.unchanged()
    assert comparator.compare_list(Category.GPU, "{b}") == SerialStatus.unchanged()


def test_compare_list_without_live_value_is_new():
    comparator = DriftComparator(BaselineSnapshot(network_macs=("AA:BB",)))
    assert comparator.compare_list(Category.NETWORK, "N/A") == SerialStatus.new()


def test_category_kind_mismatch_and_unknown_category():
    comparator = DriftComparator(BaselineSnapshot())
    with pytest.raises(ValueError):
        comparator.compare_scalar(Category.DISK, "SN-1")
    with pytest.raises(ValueError):
        comparator.compare_list(Category.SYSTEM_SERIAL, "ABC")
    with pytest.raises(ValueError):
        comparator.compare("bios_serial", "ABC")


def test_compare_routes_by_category_kind():
    comparator = DriftComparator(
        BaselineSnapshot(system_serial="ABC123", monitor_serials=("7YQ2J83",))
    )
    assert comparator.compare("system_serial", "ABC123") == SerialStatus.unchanged()
    assert comparator.compare("monitor", "7YQ2J83") == SerialStatus.unchanged()


def test_compare_snapshot_against_export():
    comparator = DriftComparator(parse(EXPORT_TEXT))
    snapshot = SnapshotModel(
        system_serial="PF3ABCDE",
        system_uuid="4C4C4544-0046-3310-8041-C4C04F334344",
        system_sku="0B2C",
        chassis_serial="CH-NEW",
        disks=(
            DiskEntry("Samsung SSD 980 PRO 1TB", "S5GXNF0R123456", "eui.1"),
            DiskEntry("Crucial MX500", "2234E5F6A7B8", "N/A"),
        ),
        network_interfaces=(NetworkInterface("eth0", "8C:EC:4B:11:22:33"),),
    )

    report = comparator.compare_snapshot(snapshot)

    by_label = {row.label: row.status for row in report}
    assert [row.category for row in report[:6]] == [
        Category.SYSTEM_SERIAL,
        Category.SYSTEM_UUID,
        Category.SYSTEM_SKU,
        Category.BASEBOARD_SERIAL,
        Category.PROCESSOR_SERIAL,
        Category.CHASSIS_SERIAL,
    ]
    assert by_label["System Serial"] == SerialStatus.unchanged()
    assert by_label["System SKU"] == SerialStatus.changed("0A1B")
    assert by_label["Baseboard Serial"] == SerialStatus.new()
    assert by_label["Chassis Serial"] == SerialStatus.new()
    assert by_label["Disk 1 (Samsung SSD 980 PRO 1TB)"] == SerialStatus.unchanged()
    assert by_label["Disk 2 (Crucial MX500)"] == SerialStatus.changed("(different from previous)")
    assert by_label["eth0"] == SerialStatus.unchanged()
    assert len(report) == 9
