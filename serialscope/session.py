import logging
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from serialscope.drift import Category
from serialscope.drift import DriftComparator
from serialscope.drift import FieldDrift
from serialscope.intel import Collector
from serialscope.intel import collect_snapshot
from serialscope.models.baseline import BaselineSnapshot
from serialscope.models.snapshot import SnapshotModel
from serialscope.models.status import SerialStatus
from serialscope.rules.advisories import generate_advisories
from serialscope.rules.posture import evaluate
from serialscope.rules.spec.model import AdvisoryEntry
from serialscope.rules.spec.model import LockPosture
from serialscope.rules.spec.model import PlatformSignals
from serialscope.settings import get_export_path
from serialscope.settings import include_timestamp
from serialscope.sinks.text_export import read_export
from serialscope.sinks.text_export import write_export
from serialscope.snapshot.parser import parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionView:
    """Read-only state of an inspection session, for presentation."""

    snapshot: SnapshotModel
    baseline: BaselineSnapshot | None
    posture: LockPosture
    advisories: tuple[AdvisoryEntry, ...]
    statuses: Mapping[Category, SerialStatus]
    export_path: str
    baseline_error: OSError | None = None


class InspectionSession:
    """
    State of one inspection run.

    Holds the collected snapshot, the baseline loaded from the export file (if
    any), the lock posture and the advisories derived from it. The snapshot and
    posture stay valid whatever happens to the export file.

    :type snapshot: SnapshotModel
    :param snapshot: Values collected for this run.
    :type signals: PlatformSignals
    :param signals: Platform security signals. Defaults to none detected.
    :type export_path: str
    :param export_path: Export file location. Defaults to the configured path.
    """

    def __init__(
        self,
        snapshot: SnapshotModel,
        signals: PlatformSignals | None = None,
        export_path: str | None = None,
    ):
        self._snapshot = snapshot
        self._posture = evaluate(signals or PlatformSignals())
        self._advisories = tuple(generate_advisories(self._posture))
        self._export_path = export_path or get_export_path()
        self._baseline: BaselineSnapshot | None = None
        self._baseline_error: OSError | None = None
        self._statuses: dict[Category, SerialStatus] = {}

    @classmethod
    def from_collector(
        cls,
        collector: Collector,
        export_path: str | None = None,
        load_baseline: bool = True,
    ) -> "InspectionSession":
        session = cls(
            collect_snapshot(collector),
            collector.platform_signals(),
            export_path,
        )
        if load_baseline:
            session.reload_baseline()
        return session

    @property
    def snapshot(self) -> SnapshotModel:
        return self._snapshot

    @property
    def baseline(self) -> BaselineSnapshot | None:
        return self._baseline

    @property
    def baseline_error(self) -> OSError | None:
        """Why the last baseline load failed, if it did for a reason other than a missing file."""
        return self._baseline_error

    @property
    def posture(self) -> LockPosture:
        return self._posture

    @property
    def advisories(self) -> tuple[AdvisoryEntry, ...]:
        return self._advisories

    @property
    def export_path(self) -> str:
        return self._export_path

    @property
    def statuses(self) -> Mapping[Category, SerialStatus]:
        """
        Most recent comparison result per category.

        After `drift_report` a list category holds its worst row, so one changed
        disk among several unchanged ones still shows as Changed.
        """
        return MappingProxyType(self._statuses)

    def reload_baseline(self) -> BaselineSnapshot | None:
        """
        Load the baseline from the export file.

        A missing file leaves the session without a baseline. Other read errors
        are logged and kept on `baseline_error`.
        """
        self._baseline_error = None
        try:
            content = read_export(self._export_path)
        except OSError as e:
            logger.warning("Cannot read previous export %s: %s", self._export_path, e)
            self._baseline_error = e
            content = None

        self._baseline = parse(content) if content is not None else None
        self._statuses.clear()
        if self._baseline is not None:
            logger.info("Loaded baseline from %s", self._export_path)
        return self._baseline

    def _comparator(self) -> DriftComparator:
        return DriftComparator(self._baseline or BaselineSnapshot())

    def compare(self, category: Category | str, current: str) -> SerialStatus:
        resolved = Category(category)
        status = self._comparator().compare(resolved, current)
        self._statuses[resolved] = status
        return status

    def drift_report(self) -> list[FieldDrift]:
        report = self._comparator().compare_snapshot(self._snapshot)
        worst: dict[Category, SerialStatus] = {}
        for row in report:
            held = worst.get(row.category)
            if held is None or row.status.worse_than(held):
                worst[row.category] = row.status
        self._statuses.update(worst)
        return report

    def export(self, generated: datetime | None = None) -> str:
        """
        Write the snapshot to the export file, then reload it as the baseline.

        :param generated: Timestamp for the export preamble. Defaults to now when
            `export.include_timestamp` is enabled.
        :return: The path written.
        :raises ExportError: if the file cannot be written.
        """
        if generated is None and include_timestamp():
            generated = datetime.now()
        path = write_export(self._snapshot, self._export_path, generated)
        self.reload_baseline()
        return path

    def view(self) -> SessionView:
        return SessionView(
            snapshot=self._snapshot,
            baseline=self._baseline,
            posture=self._posture,
            advisories=self._advisories,
            statuses=MappingProxyType(dict(self._statuses)),
            export_path=self._export_path,
            baseline_error=self._baseline_error,
        )
