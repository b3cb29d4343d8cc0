"""Group content fragment renderer."""

import argparse
import logging
from pathlib import Path
from typing import Optional

from groupcontent.batch import RenderOptions, render_entities
from groupcontent.rendering.sandbox import SecurityPolicyViolation

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for the group-content-render CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Render exported group content entities to HTML fragments"
    )
    parser.add_argument(
        "source",
        help="JSON file, directory of JSON files, or ZIP archive",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="output directory (default: print fragments to stdout)",
    )
    parser.add_argument(
        "--view-mode",
        default=None,
        help="view mode to render with, e.g. teaser or full "
        "(default: each entity's own)",
    )
    parser.add_argument(
        "--page",
        action="store_true",
        default=None,
        help="render as a full page, omitting the title heading",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="render entities but don't write any output",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing output files",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show a progress bar",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-error output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    options = RenderOptions(
        view_mode=args.view_mode,
        page=args.page,
        dry_run=args.dry_run,
        overwrite=args.overwrite,
        quiet=args.quiet,
        progress=args.progress,
    )
    destination = Path(args.destination) if args.destination else None

    try:
        return render_entities(source_path, destination, options)
    except SecurityPolicyViolation as e:
        logger.error("Template rejected by security policy: %s", e)
        return 2
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Fatal error: %s", e)
        return 2
