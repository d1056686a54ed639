import logging
import os
from datetime import datetime

from serialscope.exceptions import ExportError
from serialscope.models.snapshot import SnapshotModel
from serialscope.snapshot.serializer import serialize

logger = logging.getLogger(__name__)

# Whole-file text sink for the serial export. Each export overwrites the previous one.


def write_export(
    snapshot: SnapshotModel,
    path: str,
    generated: datetime | None = None,
) -> str:
    """
    Serialize `snapshot` and overwrite `path` with it.

    :param snapshot: The snapshot to export.
    :param path: Destination file. Missing parent directories are created.
    :param generated: Optional timestamp recorded in the export preamble.
    :return: The path written.
    :raises ExportError: if the file cannot be written.
    """
    content = serialize(snapshot, generated)
    try:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
    except OSError as e:
        raise ExportError(path, e) from e
    logger.info("Exported serials to %s", path)
    return path


def read_export(path: str) -> str | None:
    """
    Read a previous export.

    :return: The file content, or None if there is no export at `path`.
    :raises OSError: for failures other than a missing file.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            return fh.read()
    except FileNotFoundError:
        logger.debug("No previous export at %s", path)
        return None
