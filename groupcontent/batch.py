"""Batch rendering of exported group content entities."""

import logging
import tempfile
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import ijson

from groupcontent.core.parser import process_entity
from groupcontent.exporters.base import Exporter
from groupcontent.exporters.html import HTMLFileExporter, StreamExporter
from groupcontent.progress import ProgressHandler
from groupcontent.rendering.preprocess import preprocess
from groupcontent.rendering.template import GroupContentTemplate, get_template

logger = logging.getLogger(__name__)


@dataclass
class RenderOptions:
    """runtime options for a batch run."""

    view_mode: Optional[str] = None
    page: Optional[bool] = None
    dry_run: bool = False
    overwrite: bool = False
    quiet: bool = False
    progress: bool = False


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers JSON files from source path.

    Args:
        source: path to JSON file, directory, or ZIP archive
        extract_dir: where ZIP members are extracted (a new temp dir if None)

    Returns:
        list of paths to JSON files

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if source.suffix == ".zip":
            target = extract_dir or Path(tempfile.mkdtemp(prefix="groupcontent_"))
            return _extract_zip(source, target)
        if source.suffix == ".json":
            return [source]
        return []

    if source.is_dir():
        return sorted(source.glob("*.json"))

    return []


def _extract_zip(zip_path: Path, target_dir: Path) -> list[Path]:
    """extracts JSON members of a ZIP archive into target_dir."""
    with zipfile.ZipFile(zip_path, "r") as zf:
        for name in zf.namelist():
            if name.endswith(".json"):
                # keeps only the basename, preventing path traversal
                target_path = _unique_target(target_dir, Path(name).name)
                if target_path.name != Path(name).name:
                    logger.warning(
                        "Duplicate member name %s in %s, extracted as %s",
                        name,
                        zip_path.name,
                        target_path.name,
                    )
                target_path.write_bytes(zf.read(name))

    return sorted(target_dir.glob("*.json"))


def _unique_target(target_dir: Path, name: str) -> Path:
    """returns target_dir/name, suffixed with -1, -2, ... if already taken."""
    target_path = target_dir / name
    stem, suffix = target_path.stem, target_path.suffix
    counter = 1
    while target_path.exists():
        target_path = target_dir / f"{stem}-{counter}{suffix}"
        counter += 1
    return target_path


def _peek_first_char(f: Any) -> int:
    """returns first non-whitespace byte from file."""
    while True:
        char = f.read(1)
        if not char:
            return 0
        if not char.isspace():
            return int(char[0])


def iter_entities(path: Path) -> Iterator[dict[str, Any]]:
    """
    streams entity dicts from a file holding one entity or a list of them.

    Args:
        path: JSON file path

    Yields:
        raw entity dicts, in file order

    Raises:
        ValueError: if the top level is neither an object nor an array
    """
    with open(path, "rb") as f:
        first_char = _peek_first_char(f)
        f.seek(0)

        if first_char == ord("{"):
            yield from ijson.items(f, "", use_float=True)
        elif first_char == ord("["):
            yield from ijson.items(f, "item", use_float=True)
        else:
            raise ValueError("not a JSON object or array")


def render_entities(
    source: Path,
    destination: Optional[Path] = None,
    options: Optional[RenderOptions] = None,
    template: Optional[GroupContentTemplate] = None,
) -> int:
    """
    renders every entity found in source.

    Args:
        source: path to JSON file, directory, or ZIP archive
        destination: output directory, or None to print fragments to stdout
        options: batch options
        template: template to render with (shared default if None)

    Returns:
        exit code (0 success, 1 partial failure)

    Raises:
        SecurityPolicyViolation: if the template is rejected by the sandbox policy
    """
    options = options or RenderOptions()
    template = template or get_template()
    exporter: Exporter = HTMLFileExporter() if destination else StreamExporter()
    target = str(destination) if destination else "-"

    with tempfile.TemporaryDirectory(
        prefix="groupcontent_"
    ) as temp_dir, ProgressHandler(
        quiet=options.quiet, show_progress=options.progress
    ) as handler:
        handler.start_discovery()

        files = discover_files(source, Path(temp_dir))
        if not files:
            handler.log_info(f"No JSON files found in {source}")
            return 0

        handler.log_info(f"Found {len(files)} file(s) to process")
        handler.set_total(len(files))

        rendered = 0
        failed = 0

        for file_path in files:
            file_rendered, file_failed = _render_file(
                file_path, template, exporter, target, options, handler
            )
            rendered += file_rendered
            failed += file_failed

        handler.finish(rendered, failed)

    if failed > 0:
        return 1
    return 0


def _render_file(
    file_path: Path,
    template: GroupContentTemplate,
    exporter: Exporter,
    destination: str,
    options: RenderOptions,
    handler: ProgressHandler,
) -> tuple[int, int]:
    """
    renders all entities of one file.

    Returns:
        tuple of (rendered count, failed count)
    """
    rendered = 0
    failed = 0
    seen = 0

    try:
        for entity_data in iter_entities(file_path):
            seen += 1
            if seen > 1:
                handler.adjust_total(1)
            if _render_one(entity_data, template, exporter, destination, options, handler):
                rendered += 1
            else:
                failed += 1
    except (OSError, ValueError, ijson.JSONError) as e:
        handler.log_error(f"Failed: {file_path.name}: {e}")
        handler.update(file_path.name)
        failed += 1
        return rendered, failed

    # empty list: still counts as one step of the bar
    if seen == 0:
        handler.log_info(f"No entities in {file_path.name}")
        handler.update(file_path.name)

    return rendered, failed


def _render_one(
    entity_data: Any,
    template: GroupContentTemplate,
    exporter: Exporter,
    destination: str,
    options: RenderOptions,
    handler: ProgressHandler,
) -> bool:
    """renders and exports a single entity; policy violations propagate."""
    label = "Unknown"
    try:
        entity = process_entity(entity_data)
        label = entity.label
        context = preprocess(entity, options.view_mode)
        if options.page is not None:
            context["page"] = options.page

        html = template.render(context)
        exporter.export(
            entity,
            html,
            destination,
            dry_run=options.dry_run,
            overwrite=options.overwrite,
        )
    except (KeyError, TypeError, ValueError, AttributeError, OSError) as e:
        if isinstance(entity_data, dict):
            label = entity_data.get("label") or label
        handler.log_error(f"Failed: {label}: {e}")
        handler.update(label)
        return False

    handler.update(label)
    return True
