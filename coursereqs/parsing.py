import json
import logging
import re
import typing as t
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from coursereqs.catalog import Catalog, course_key
from coursereqs.core.config import settings
from coursereqs.errors import CatalogYearError, CourseFormatError
from coursereqs.schemas.course import Course

logger = logging.getLogger(__name__)

# "CS1337.001.22F" -> ("CS", "1337")
SECTION_PREFIX_RE = re.compile(r"^([A-Z]{2,4})([0-9V]{4})")

# "(3-0) S" -> lecture hours, lab hours, offering frequency
CONTACT_RE = re.compile(r"\(([0-9]+)-([0-9]+)\)\s+([SUFY]+)")

# "Term: 22F"
TERM_RE = re.compile(r"Term: ([0-9]{2}[sufSUF])", re.I)


def clean_space(s: str) -> str:
    return re.sub(r"\s+", " ", s or "").strip()


def _body(table: Tag) -> Tag:
    return table.find("tbody", recursive=False) or table


def extract_course_fields(html: str) -> t.Tuple[t.Dict[str, str], t.Dict[str, str]]:
    """
    Read a course page's info tables.

    Returns (row_info, class_info):
      row_info   – overview table, keyed by row header ("Description:", "Enrollment Reqs:", ...)
      class_info – class sub-table, keyed by cell label ("Class Section:", ...)
    """
    soup = BeautifulSoup(html, "html.parser")
    row_info: t.Dict[str, str] = {}
    class_info: t.Dict[str, str] = {}

    overview = soup.find("table", class_="courseinfo__overviewtable")
    if overview is None:
        return row_info, class_info

    for row in _body(overview).find_all("tr", recursive=False):
        header = row.find("th")
        data = row.find("td")
        if header is None or data is None:
            continue
        row_info[clean_space(header.get_text(" ", strip=True))] = clean_space(data.get_text(" ", strip=True))

    subtable = overview.find("table", class_="courseinfo__classsubtable")
    if subtable is not None:
        for label in subtable.find_all("td", class_="courseinfo__classsubtable__th"):
            value = label.find_next_sibling("td")
            class_info[clean_space(label.get_text(" ", strip=True))] = (
                clean_space(value.get_text(" ", strip=True)) if value is not None else ""
            )

    return row_info, class_info


def session_from_schedule(schedule_text: str) -> str:
    m = TERM_RE.search(schedule_text or "")
    if not m:
        raise CatalogYearError(schedule_text or "")
    return m.group(1)


def catalog_year(session_name: str) -> str:
    """
    Catalog year for an academic session code like "22F".
    Fall starts a catalog year; spring and summer belong to the previous one.
    """
    try:
        year = int(session_name[0:2])
        semester = session_name[2].upper()
    except (ValueError, IndexError):
        raise CatalogYearError(session_name) from None
    if semester == "F":
        return str(year)
    if semester in ("S", "U"):
        return str(year - 1)
    raise CatalogYearError(session_name)


def parse_course(
    catalog: Catalog,
    course_num: str,
    session_name: str,
    row_info: t.Dict[str, str],
    class_info: t.Dict[str, str],
) -> Course:
    """Build and register a course, or return the one already registered for this ICN and year."""
    year = catalog_year(session_name)
    existing = catalog.get(course_key(course_num, year))
    if existing is not None:
        return existing

    section_id = class_info.get("Class Section:", "")
    m = SECTION_PREFIX_RE.match(section_id)
    if not m:
        raise CourseFormatError(section_id)
    subject, number = m.groups()

    course = Course(
        subject_prefix=subject,
        course_number=number,
        internal_course_number=course_num,
        catalog_year=year,
        title=row_info.get("Course Title:", ""),
        description=row_info.get("Description:", ""),
        enrollment_reqs=row_info.get("Enrollment Reqs:"),
        school=row_info.get("College:", ""),
        credit_hours=class_info.get("Semester Credit Hours:", ""),
        class_level=class_info.get("Class Level:", ""),
        activity_type=class_info.get("Activity Type:", ""),
        grading=class_info.get("Grading:", ""),
    )

    contact = CONTACT_RE.search(course.description)
    if contact:
        course.lecture_contact_hours, course.laboratory_contact_hours, course.offering_frequency = contact.groups()

    return catalog.add(course)


def parse_course_page(catalog: Catalog, html: str) -> Course:
    """Phase 1 for one scraped course page."""
    row_info, class_info = extract_course_fields(html)

    # "87011 / 0000" -> class number, course number (ICN)
    numbers = class_info.get("Class/Course Number:", "").split(" / ")
    if len(numbers) < 2:
        raise CourseFormatError(class_info.get("Class/Course Number:", ""))
    course_num = numbers[1].strip()

    session_name = session_from_schedule(row_info.get("Schedule:", ""))
    course = parse_course(catalog, course_num, session_name, row_info, class_info)
    logger.debug("parsed %s (%s)", course.code, course_num)
    return course


def load_course_pages(catalog: Catalog, in_dir: str) -> int:
    """Register every *.html course page under ``in_dir``. Returns the number of pages read."""
    paths = sorted(Path(in_dir).rglob("*.html"))
    logger.info("parsing %d course pages from %s", len(paths), in_dir)
    for path in paths:
        parse_course_page(catalog, path.read_text(encoding="utf-8"))
    logger.info("registered %d courses", len(catalog))
    return len(paths)


def write_courses(catalog: Catalog, path: str | None = None) -> Path:
    out = Path(path) if path else Path(settings.output_dir) / "courses.json"
    out.parent.mkdir(parents=True, exist_ok=True)
    data = [c.model_dump(mode="json") for c in catalog]
    out.write_text(json.dumps(data, indent="\t"), encoding="utf-8")
    logger.info("wrote %d courses to %s", len(data), out)
    return out
