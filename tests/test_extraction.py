import pytest

from coursereqs.catalog import Catalog
from coursereqs.errors import RequisiteParseError
from coursereqs.requisites.extraction import (
    extract_requisite_text,
    parse_catalog_requisites,
    parse_course_requisites,
)
from coursereqs.schemas.requirements import CollectionRequirement, CourseRequirement

from conftest import make_course


def requisites(*options):
    return CollectionRequirement(name="REQUISITES", required=len(options), options=list(options))


def course(icn, grade="D"):
    return CourseRequirement(icn=icn, minimum_grade=grade)


def test_prereq_then_coreq_are_separated():
    assert extract_requisite_text("Prerequisite: CS1336. Corequisite: CS1337.") == {
        "prerequisites": "CS1336.",
        "corequisites": "CS1337.",
    }


def test_coreq_then_prereq_are_separated():
    assert extract_requisite_text("Corequisite: CS1337. Prerequisite: CS1336.") == {
        "prerequisites": "CS1336.",
        "corequisites": "CS1337.",
    }


def test_combined_form_wins():
    assert extract_requisite_text("Prerequisites or corequisites: CS1336.") == {
        "co_or_pre_requisites": "CS1336.",
    }
    assert extract_requisite_text("Corequisite or Prerequisite: MATH 2413") == {
        "co_or_pre_requisites": "MATH 2413",
    }


def test_no_requisites():
    assert extract_requisite_text("An introduction to programming.") == {}
    assert extract_requisite_text(None) == {}


def test_parse_course_requisites_from_description(catalog):
    c = make_course(
        "CS", "2336", "000103",
        description="Object-oriented programming. Prerequisite: CS1336. Corequisite: CS1337.",
    )
    parse_course_requisites(c, catalog)
    assert c.prerequisites == requisites(course("000101"))
    assert c.corequisites == requisites(course("000102"))
    assert c.co_or_pre_requisites is None


def test_enrollment_reqs_take_precedence(catalog):
    c = make_course(
        "CS", "2336", "000103",
        description="Prerequisite: CS1336.",
        enrollment_reqs="Prerequisite: CS 1337 with a grade of C or better.",
    )
    parse_course_requisites(c, catalog)
    assert c.prerequisites == requisites(course("000102", "C"))


def test_throwaway_only_leaves_field_unset(catalog):
    c = make_course("ENGL", "1302", "000402", description="Prerequisite: (same as ENGL1301)")
    parse_course_requisites(c, catalog)
    assert c.prerequisites is None


def test_catalog_pass_resolves_courses_registered_later():
    catalog = Catalog()
    catalog.add(make_course("CS", "2336", "000103", description="Prerequisite: CS1337."))
    catalog.add(make_course("CS", "1337", "000102"))
    assert parse_catalog_requisites(catalog) == 2
    assert catalog.find("CS", "2336").prerequisites == requisites(course("000102"))


def test_fatal_error_leaves_catalog_untouched():
    catalog = Catalog()
    good = catalog.add(make_course("CS", "2336", "000103", description="Prerequisite: CS1337."))
    catalog.add(make_course("CS", "1337", "000102"))
    catalog.add(make_course("CS", "4349", "000104", description="Prerequisite: Minimum GPA of 2..5"))

    with pytest.raises(RequisiteParseError):
        parse_catalog_requisites(catalog)
    assert good.prerequisites is None
