import logging
import re
from typing import Dict, List, Tuple

from coursereqs.catalog import Catalog
from coursereqs.schemas.course import Course
from coursereqs.schemas.requirements import CollectionRequirement

from .grouping import trim
from .parser import parse_statement

logger = logging.getLogger(__name__)

PRE_OR_COREQ_RE = re.compile(
    r"((?:Prerequisites?\s+or\s+corequisites?|Corequisites?\s+or\s+prerequisites?):(.*))", re.I
)
PREREQ_RE = re.compile(r"(Prerequisites?:(.*))", re.I)
COREQ_RE = re.compile(r"(Corequisites?:(.*))", re.I)

# Keep this order: the combined form has to be consumed before the single
# forms can split it apart.
REQUISITE_FIELDS = (
    ("co_or_pre_requisites", PRE_OR_COREQ_RE),
    ("prerequisites", PREREQ_RE),
    ("corequisites", COREQ_RE),
)


def extract_requisite_text(text: str) -> Dict[str, str]:
    """
    Split catalog text into the statement for each requisite kind.

    Returns a mapping of course field name -> statement text for every kind
    found. Clauses of the other kinds nested inside a statement are cut out of
    it and left in the search text, so each clause lands in exactly one field.
    """
    found: Dict[str, str] = {}
    check_text = text or ""
    for field_name, regex in REQUISITE_FIELDS:
        match = regex.search(check_text)
        if match is None:
            continue
        outer, req_text = match.group(1), match.group(2)
        nested = []
        for other in REQUISITE_FIELDS:
            inner = other[1].search(req_text)
            if inner is not None:
                nested.append(inner.group(1))
                req_text = req_text.replace(inner.group(1), "")
        check_text = check_text.replace(outer, " ".join(nested))
        found[field_name] = trim(req_text)
    return found


def course_requisites(course: Course, catalog: Catalog) -> Dict[str, CollectionRequirement]:
    """Parse a course's requisite statements without touching the course."""
    source = course.enrollment_reqs if course.enrollment_reqs is not None else course.description
    statements = extract_requisite_text(source)
    parsed: Dict[str, CollectionRequirement] = {}
    for field_name, _ in REQUISITE_FIELDS:
        if field_name not in statements:
            continue
        req = parse_statement(catalog, statements[field_name])
        if req is not None:
            parsed[field_name] = req
    return parsed


def parse_course_requisites(course: Course, catalog: Catalog) -> Course:
    """Fill a course's three requisite fields from its enrollment reqs or description."""
    for field_name, req in course_requisites(course, catalog).items():
        setattr(course, field_name, req)
    return course


def parse_catalog_requisites(catalog: Catalog) -> int:
    """
    Second pass over a fully registered catalog. Returns the number of courses visited.

    Every course is parsed before any is updated, so a fatal ``ParserError``
    leaves the catalog exactly as it was.
    """
    logger.info("parsing requisites for %d courses", len(catalog))
    pending: List[Tuple[Course, Dict[str, CollectionRequirement]]] = [
        (course, course_requisites(course, catalog)) for course in catalog
    ]
    for course, parsed in pending:
        for field_name, req in parsed.items():
            setattr(course, field_name, req)
    logger.info("finished parsing course requisites")
    return len(pending)
