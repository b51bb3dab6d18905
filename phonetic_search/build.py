"""Build a search index artifact from a directory of documents."""

import argparse
import functools
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog

from .config import Settings, configure_logging, get_settings
from .core.index import IndexBuilder, SearchIndex, default_transform_url
from .loader import discover_documents

logger = structlog.get_logger(__name__)

_FIELD_SPECS = {"true": True, "false": False}


def parse_field(option: str) -> Dict[str, Union[bool, str]]:
    """Parse a ``NAME=SPEC`` option into a one-field mapping."""
    name, sep, spec = option.partition("=")
    name = name.strip()
    if not name or not sep:
        raise argparse.ArgumentTypeError(f"expected NAME=SPEC, got '{option}'")
    spec = spec.strip().lower()
    return {name: _FIELD_SPECS.get(spec, spec)}


def output_path(settings: Settings) -> Path:
    """Where the artifact is written: ``index_path`` or ``source_dir/destination_json``."""
    if settings.index_path:
        return Path(settings.index_path)
    return Path(settings.source_dir) / settings.destination_json


def build_site_index(settings: Settings, write: bool = True) -> SearchIndex:
    """
    Load the documents under ``settings.source_dir`` and index them.

    Args:
        settings: Source, field and output configuration
        write: Whether to save the artifact to disk

    Returns:
        The built index
    """
    if not settings.source_dir:
        raise ValueError("source_dir is not configured")

    documents = discover_documents(settings.source_dir, settings.match)
    builder = IndexBuilder(
        index_fields=settings.index_fields,
        transform_url=functools.partial(default_transform_url, prefix=settings.url_prefix),
        workers=settings.build_workers,
    )
    index = builder.build(documents)

    if write:
        destination = index.save(output_path(settings))
        logger.info("index_written", path=str(destination), total_entries=len(index))

    return index


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        prog="phonetic-search-build",
        description="Build a phonetic search index from HTML or markdown files",
    )
    parser.add_argument("--source", help="Directory containing the documents")
    parser.add_argument("--output", help="Path of the JSON artifact to write")
    parser.add_argument(
        "--match", action="append",
        help="Glob pattern of files to index (repeatable)"
    )
    parser.add_argument(
        "--field", action="append", type=parse_field, metavar="NAME=SPEC",
        help="Field to index and how to clean it: true, false, html, markdown, md, keywords"
    )
    parser.add_argument("--workers", type=int, help="Threads used to tokenize documents")
    parser.add_argument("--log-level", help="Logging level")
    args = parser.parse_args(argv)

    overrides = {}
    if args.source:
        overrides["source_dir"] = args.source
    if args.output:
        overrides["index_path"] = args.output
    if args.match:
        overrides["match"] = args.match
    if args.field:
        fields: Dict[str, Union[bool, str]] = {}
        for field in args.field:
            fields.update(field)
        overrides["index_fields"] = fields
    if args.workers:
        overrides["build_workers"] = args.workers
    if args.log_level:
        overrides["log_level"] = args.log_level

    settings = get_settings().model_copy(update=overrides)
    configure_logging(settings.log_level, settings.log_format)

    if not settings.source_dir:
        parser.error("--source is required when PHONETIC_SEARCH_SOURCE_DIR is not set")

    build_site_index(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
