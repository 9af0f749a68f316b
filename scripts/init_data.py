#!/usr/bin/env python3
"""Initialize the data directory with default content.

Usage: python scripts/init_data.py [--data-dir DIR] [--work-dir DIR]

Creates locales/, images/ and the work dir, copies the bundled locale files,
builds bio.json from each locale's about.bio and tracks.json from any audio
already in the work dir. Existing files are left alone.
"""
import argparse
import logging
import os
import sys

# Ensure repo root is in path
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, REPO_ROOT)

from portfolio.core import paths  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", default=None, help="defaults to $PORTFOLIO_DATA_DIR or ./data")
    parser.add_argument("--work-dir", default=None, help="defaults to $PORTFOLIO_WORK_DIR or <data-dir>/work")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    data_dir = os.path.abspath(args.data_dir) if args.data_dir else paths.resolve_data_dir()
    work_dir = os.path.abspath(args.work_dir) if args.work_dir else paths.resolve_work_dir(data_dir)

    created = paths.seed_data_dir(data_dir, work_dir)
    if created:
        print(f"Initialized {data_dir}: {', '.join(created)}")
    else:
        print(f"{data_dir} already initialized, nothing to do")
    return 0


if __name__ == "__main__":
    sys.exit(main())
