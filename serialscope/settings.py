import logging
import os
from typing import Any

from dynaconf import Dynaconf

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "serials_export.txt"

settings = Dynaconf(
    includes=["settings.toml"],
    load_dotenv=True,
    merge_enabled=True,
    envvar_prefix="SERIALSCOPE",
)


def _section(name: str) -> Any:
    return settings.get(name, None) or {}


def get_export_path() -> str:
    """
    Resolve the path of the serial export file.

    Uses `export.directory` and `export.filename` from settings.toml or the
    SERIALSCOPE_EXPORT__DIRECTORY / SERIALSCOPE_EXPORT__FILENAME environment
    variables. Defaults to `serials_export.txt` in the current working directory.
    """
    export_settings = _section("export")
    filename = export_settings.get("filename") or DEFAULT_EXPORT_FILENAME
    directory = export_settings.get("directory")
    if directory:
        return os.path.join(directory, filename)
    return filename


def include_timestamp() -> bool:
    """Whether exports start with a `Generated:` preamble."""
    return bool(_section("export").get("include_timestamp", True))


def get_inventory_path() -> str | None:
    return _section("inventory").get("path") or None


def populate_settings_from_cli(
    export_file: str | None = None,
    inventory: str | None = None,
) -> None:
    """
    Let command line options take precedence over settings.toml and the environment.

    Args:
        export_file (str | None): Path of the export file. Splits into directory and filename.
        inventory (str | None): Path of a JSON inventory document.
    """
    if export_file:
        directory, filename = os.path.split(export_file)
        logger.debug("Using export file %s from the command line.", export_file)
        settings.update(
            {"export": {"directory": directory or None, "filename": filename}}
        )
    if inventory:
        logger.debug("Using inventory document %s from the command line.", inventory)
        settings.update({"inventory": {"path": inventory}})
