"""
Batch run over a directory of scraped course pages.

Phase 1 registers every course page, phase 2 parses requisites against the
full catalog, and the result is written to ``courses.json``.
"""
import argparse
import logging
import sys
from pathlib import Path

from coursereqs.catalog import Catalog
from coursereqs.core.config import settings
from coursereqs.core.logging import configure_logging
from coursereqs.errors import ParserError
from coursereqs.parsing import load_course_pages, write_courses
from coursereqs.requisites.extraction import parse_catalog_requisites

logger = logging.getLogger(__name__)


def run_pipeline(in_dir: str, out_path: str | None = None, catalog: Catalog | None = None) -> Path:
    catalog = catalog if catalog is not None else Catalog()
    load_course_pages(catalog, in_dir)
    parse_catalog_requisites(catalog)
    return write_courses(catalog, out_path)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Parse scraped course pages into courses.json.")
    ap.add_argument("--in", dest="inp", required=True, help="Directory of scraped course pages (*.html)")
    ap.add_argument("--out", dest="out", default=None,
                    help=f"Output JSON path (default: {settings.output_dir}/courses.json)")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()
    try:
        out = run_pipeline(args.inp, args.out)
    except ParserError as e:
        logger.error("parse aborted: %s", e)
        return 1
    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
