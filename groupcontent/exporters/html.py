"""HTML fragment exporters."""

import logging
import re
import sys
from pathlib import Path
from typing import Optional, TextIO

from groupcontent.core.models import GroupContent
from groupcontent.exporters.base import Exporter

logger = logging.getLogger(__name__)


def fragment_filename(entity: GroupContent) -> str:
    """returns the output filename for an entity."""
    # removes/replaces characters that are invalid in filenames
    safe_id = re.sub(r"[^\w-]", "_", entity.id).strip("_") or "unknown"
    return f"group-content-{safe_id}.html"


class HTMLFileExporter(Exporter):  # pylint: disable=too-few-public-methods
    """writes one HTML file per entity into a directory."""

    def export(
        self,
        entity: GroupContent,
        html: str,
        destination: str,
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> None:
        """writes the fragment to destination/group-content-{id}.html."""
        output_path = Path(destination) / fragment_filename(entity)

        if dry_run:
            logger.info("Would write to: %s", output_path)
            return

        if output_path.exists() and not overwrite:
            logger.info("Skipping existing file: %s", output_path)
            return

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html + "\n", encoding="utf-8")
        logger.debug("Wrote %s", output_path)


class StreamExporter(Exporter):  # pylint: disable=too-few-public-methods
    """writes fragments to a text stream, one after another."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def export(
        self,
        entity: GroupContent,
        html: str,
        destination: str = "-",
        dry_run: bool = False,
        overwrite: bool = False,
    ) -> None:
        """writes the fragment to the stream; destination is ignored."""
        if dry_run:
            logger.info("Would print group content %s", entity.id)
            return

        stream = self.stream or sys.stdout
        stream.write(html)
        stream.write("\n")
