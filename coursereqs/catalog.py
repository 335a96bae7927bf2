import logging
import threading
from typing import Dict, Iterator, List

from coursereqs.errors import CourseNotFoundError
from coursereqs.schemas.course import Course

logger = logging.getLogger(__name__)


def course_key(internal_course_number: str, catalog_year: str) -> str:
    # courses are keyed by ICN + the catalog year they belong to
    return internal_course_number + catalog_year


class Catalog:
    """
    Registry of every course discovered so far.

    Registration happens in phase 1 (course discovery); phase 2 walks the
    registry and fills in requisites. ICN lookups scan in registration order,
    so a course that has not been registered yet simply isn't found.

    The API shares one catalog between requests, so reads work on a snapshot
    taken under the lock and never see the dict change size mid-scan.
    """

    def __init__(self) -> None:
        self._courses: Dict[str, Course] = {}
        self._lock = threading.Lock()

    def _snapshot(self) -> List[Course]:
        with self._lock:
            return list(self._courses.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._courses)

    def __iter__(self) -> Iterator[Course]:
        return iter(self._snapshot())

    def get(self, key: str) -> Course | None:
        with self._lock:
            return self._courses.get(key)

    def add(self, course: Course) -> Course:
        key = course_key(course.internal_course_number, course.catalog_year)
        with self._lock:
            existing = self._courses.get(key)
            if existing is not None:
                return existing
            self._courses[key] = course
            return course

    def find(self, subject: str, number: str) -> Course | None:
        for course in self._snapshot():
            if course.subject_prefix == subject and course.course_number == number:
                return course
        return None

    def find_icn(self, subject: str, number: str) -> str:
        course = self.find(subject, number)
        if course is None:
            raise CourseNotFoundError(subject, number)
        return course.internal_course_number

    def clear(self) -> None:
        with self._lock:
            self._courses.clear()


_catalog = Catalog()


def get_catalog() -> Catalog:
    """Shared catalog used by the API (override in tests)."""
    return _catalog
