import pytest

from coursereqs.catalog import Catalog
from coursereqs.schemas.course import Course

# (subject, number, icn)
COURSES = [
    ("CS", "1336", "000101"),
    ("CS", "1337", "000102"),
    ("MATH", "2413", "000201"),
    ("BIOL", "1", "000301"),
    ("ENGL", "1301", "000401"),
]


def make_course(subject: str, number: str, icn: str, **kwargs) -> Course:
    return Course(subject_prefix=subject, course_number=number, internal_course_number=icn, **kwargs)


@pytest.fixture
def catalog() -> Catalog:
    c = Catalog()
    for subject, number, icn in COURSES:
        c.add(make_course(subject, number, icn))
    return c
