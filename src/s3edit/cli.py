"""Command line entry point.

Usage:
    s3edit s3://bucket-name/path/to/file [--editor vim]
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from s3edit.core.config import AppSettings
from s3edit.core.exceptions import S3EditError
from s3edit.editor import EDITOR_NAMES, Editor
from s3edit.models.locator import parse_s3_path
from s3edit.persistence import create_object_store
from s3edit.workflow import EditSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3edit",
        description="Edit an S3 object in a local terminal editor and upload it back.",
    )
    parser.add_argument("s3_path", metavar="S3_PATH", help="Object to edit, e.g. s3://bucket-name/path/to/file")
    parser.add_argument(
        "--editor", choices=EDITOR_NAMES, default=None,
        help="Editor to launch; prompts when omitted",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = AppSettings()
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(part) for part in err["loc"])
        print(f"s3edit: invalid configuration for {field}: {err['msg']}", file=sys.stderr)
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        locator = parse_s3_path(args.s3_path)
        session = EditSession(
            create_object_store(settings),
            editor=Editor(args.editor) if args.editor else None,
        )
        session.run(locator)
    except S3EditError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
