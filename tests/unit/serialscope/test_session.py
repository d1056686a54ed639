import json
import os
from datetime import datetime

import pytest

from serialscope.drift import Category
from serialscope.exceptions import ExportError
from serialscope.intel.inventory_file import InventoryFileCollector
from serialscope.models.snapshot import DiskEntry
from serialscope.models.snapshot import SnapshotModel
from serialscope.models.status import SerialStatus
from serialscope.rules.spec.model import Difficulty
from serialscope.rules.spec.model import PlatformSignals
from serialscope.session import InspectionSession
from tests.data.serialscope.inventory import EXPORT_TEXT
from tests.data.serialscope.inventory import INVENTORY


@pytest.fixture
def collector():
    return InventoryFileCollector.from_json(json.dumps(INVENTORY))


def test_session_without_previous_export(tmp_path, collector):
    session = InspectionSession.from_collector(
        collector, export_path=str(tmp_path / "serials_export.txt")
    )

    assert session.baseline is None
    assert session.baseline_error is None
    assert session.posture.overall_locked is True
    assert len(session.advisories) == 6
    assert session.compare(Category.SYSTEM_SERIAL, session.snapshot.system_serial) == SerialStatus.new()
    assert all(row.status.is_new for row in session.drift_report())


def test_session_loads_previous_export(tmp_path, collector):
    path = tmp_path / "serials_export.txt"
    path.write_text(EXPORT_TEXT, encoding="utf-8")

    session = InspectionSession.from_collector(collector, export_path=str(path))

    assert session.baseline is not None
    assert session.baseline.system_serial == "PF3ABCDE"
    assert session.compare("system_serial", "PF3ABCDE") == SerialStatus.unchanged()
    assert session.compare("disk", "S5GXNF0R123456") == SerialStatus.unchanged()
    assert session.statuses[Category.DISK] == SerialStatus.unchanged()
    report = session.drift_report()
    assert not any(row.status.is_changed for row in report)


def test_export_then_compare_uses_new_baseline(tmp_path):
    path = str(tmp_path / "serials_export.txt")
    session = InspectionSession(SnapshotModel(system_serial="ABC123"), export_path=path)
    assert session.compare("system_serial", "ABC123") == SerialStatus.new()

    written = session.export(generated=datetime(2026, 10, 19, 9, 30))

    assert written == path
    assert session.baseline.system_serial == "ABC123"
    assert session.compare("system_serial", "ABC123") == SerialStatus.unchanged()
    assert session.compare("system_serial", "XYZ999") == SerialStatus.changed("ABC123")


def test_export_failure_keeps_session_valid(tmp_path):
    path = str(tmp_path / "a_directory")
    os.makedirs(path)
    snapshot = SnapshotModel(system_serial="ABC123")
    session = InspectionSession(
        snapshot, PlatformSignals(secure_boot=True), export_path=path
    )

    with pytest.raises(ExportError):
        session.export()

    assert session.snapshot is snapshot
    assert session.posture.secure_boot_enforced is True
    assert session.baseline is None


def test_unreadable_baseline_is_reported_not_raised(tmp_path):
    # Reading a directory fails with something other than FileNotFoundError.
    path = str(tmp_path / "a_directory")
    os.makedirs(path)
    session = InspectionSession(SnapshotModel(), export_path=path)

    assert session.reload_baseline() is None
    assert isinstance(session.baseline_error, OSError)


def test_view_is_a_read_only_copy(tmp_path):
    session = InspectionSession(
        SnapshotModel(system_serial="ABC123"),
        export_path=str(tmp_path / "serials_export.txt"),
    )
    session.compare("system_serial", "ABC123")

    view = session.view()
    session.compare("chassis_serial", "CH-7")

    assert view.snapshot.system_serial == "ABC123"
    assert view.posture.overall_locked is False
    assert view.advisories[0].difficulty == Difficulty.MEDIUM
    assert list(view.statuses) == [Category.SYSTEM_SERIAL]
    with pytest.raises(TypeError):
        view.statuses[Category.DISK] = SerialStatus.new()


def test_drift_report_keeps_worst_status_per_list_category(tmp_path):
    path = tmp_path / "serials_export.txt"
    path.write_text(
        "=== DISKS ===\nDisk 1: Old drive\n  Serial (Storage Query): SN1\n",
        encoding="utf-8",
    )
    snapshot = SnapshotModel(
        disks=(
            DiskEntry(model="Replacement", storage_query_serial="SNX"),
            DiskEntry(model="Old drive", storage_query_serial="SN1"),
        )
    )
    session = InspectionSession(snapshot, export_path=str(path))
    session.reload_baseline()

    report = session.drift_report()

    disk_rows = [row.status for row in report if row.category == Category.DISK]
    assert disk_rows == [
        SerialStatus.changed("(different from previous)"),
        SerialStatus.unchanged(),
    ]
    assert session.statuses[Category.DISK].is_changed
