"""
CLI script to bulk-ingest a directory of PDFs.

Usage:
    python scripts/run_indexer.py path/to/pdfs              # Add new files
    python scripts/run_indexer.py path/to/pdfs --reset      # Wipe corpus first
    python scripts/run_indexer.py path/to/pdfs --user alice # Uploader identity
    python scripts/run_indexer.py path/to/pdfs --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdfsearch.core import get_config, ConfigurationError, PDFSearchError
from pdfsearch.core.config_loader import reload_config
from pdfsearch.database import get_statistics
from pdfsearch.indexer import IndexBuilder


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Ingest every PDF under a directory into the search index"
    )

    parser.add_argument(
        "directory",
        type=str,
        help="Directory scanned recursively for PDF files"
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all documents, stored files and cached responses first"
    )

    parser.add_argument(
        "--user",
        type=str,
        default="indexer",
        help="Uploader id recorded on ingested documents (default: indexer)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    return parser.parse_args()


def progress_callback(current: int, total: int, filename: str) -> None:
    """Print progress to console."""
    percent = (current / total) * 100 if total > 0 else 0
    bar_width = 30
    filled = int(bar_width * current / total) if total > 0 else 0
    bar = "=" * filled + "-" * (bar_width - filled)

    print(f"\r[{bar}] {percent:5.1f}% ({current}/{total}) {filename[:40]:<40}", end="", flush=True)


def main():
    """Main entry point for the indexer CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    source = Path(args.directory)
    if not source.is_dir():
        print(f"Error: Not a directory: {source}")
        sys.exit(1)

    print("=" * 60)
    print("PDF Search Service - Bulk Indexer")
    print("=" * 60)
    print(f"Source directory:  {source}")
    print(f"Storage directory: {config.paths.storage_directory}")
    print(f"Index:             {config.elasticsearch.index_name}")
    print(f"Reset mode:        {args.reset}")
    print("=" * 60)

    if args.reset:
        response = input("This will DELETE all indexed documents and stored files. Continue? [y/N] ")
        if response.lower() != "y":
            print("Aborted.")
            sys.exit(0)

    callback = None if args.quiet else progress_callback

    try:
        builder = IndexBuilder(
            source,
            uploader_id=args.user,
            reset=args.reset,
            progress_callback=callback
        )

        print("\nStarting indexing...\n")
        stats = builder.build()
        index_stats = get_statistics()
    except PDFSearchError as e:
        print(f"\nIndexing aborted: {e.message}")
        sys.exit(2)

    if not args.quiet:
        print("\n")

    print("=" * 60)
    print("Indexing Complete")
    print("=" * 60)
    print(f"Files scanned:     {stats.files_scanned:,}")
    print(f"Files indexed:     {stats.files_indexed:,}")
    print(f"Duplicates:        {stats.files_duplicate:,}")
    print(f"Files failed:      {stats.files_failed:,}")
    print(f"Pages indexed:     {stats.pages_indexed:,}")
    print(f"Documents in index: {index_stats['total_documents']:,}")
    print("=" * 60)

    if stats.errors:
        print(f"\nErrors ({len(stats.errors)}):")
        for error in stats.errors[:20]:
            print(f"  - {error}")
        if len(stats.errors) > 20:
            print(f"  ... and {len(stats.errors) - 20} more errors")

    if stats.files_failed > 0:
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
