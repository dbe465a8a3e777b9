#!/usr/bin/env python3
# =============================================================================
# scripts/import_markdown.py - Bulk Import Markdown Files
# =============================================================================
# Imports every markdown file in a directory as documents owned by a user.
# Files whose name the user already has are skipped.
#
# Usage:
#   poetry run python scripts/import_markdown.py <user_id> <directory>
#   poetry run python scripts/import_markdown.py <user_id> docs/ --public
#
# Prerequisites:
#   - SUPABASE_URL / SUPABASE_SERVICE_KEY set (.env file)
# =============================================================================

import argparse
import os
import sys
from pathlib import Path
from uuid import UUID

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.exceptions import MarkShareException
from core.services.document_service import DocumentService
from lib.utils import file_extension


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import markdown files as documents")
    parser.add_argument("user_id", type=UUID, help="Owner of the imported documents")
    parser.add_argument("directory", type=Path, help="Directory to scan (not recursive)")
    parser.add_argument("--public", action="store_true", help="Publish the imported documents")
    return parser.parse_args(argv)


def import_directory(user_id: UUID, directory: Path, is_public: bool = False) -> tuple[int, int, int]:
    """
    Import every allowed file in a directory.

    Returns:
        (imported, skipped, failed) counts
    """
    imported = skipped = failed = 0

    for path in sorted(directory.iterdir()):
        if not path.is_file() or file_extension(path.name) not in settings.allowed_extensions_list:
            continue

        if DocumentService.file_name_exists(user_id, path.name):
            print(f"  skip   {path.name} (already exists)")
            skipped += 1
            continue

        try:
            document = DocumentService.create_document(
                user_id=user_id,
                file_name=path.name,
                content=path.read_text(encoding="utf-8-sig"),
                is_public=is_public,
            )
        except (MarkShareException, UnicodeDecodeError) as e:
            print(f"  FAIL   {path.name}: {e}")
            failed += 1
            continue

        print(f"  import {path.name} -> {document.id}")
        imported += 1

    return imported, skipped, failed


def main() -> int:
    args = parse_args()

    if not args.directory.is_dir():
        print(f"ERROR: {args.directory} is not a directory")
        return 1

    print("=" * 60)
    print(f"Importing {args.directory} for user {args.user_id}")
    print("=" * 60)

    imported, skipped, failed = import_directory(args.user_id, args.directory, args.public)

    print()
    print(f"Imported: {imported}  Skipped: {skipped}  Failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
