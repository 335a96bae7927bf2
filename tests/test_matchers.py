import pytest

from coursereqs.errors import RequisiteParseError
from coursereqs.requisites.grouping import Arena
from coursereqs.requisites.matchers import MATCHERS, ParseContext, join_adjacent_others, parse_group
from coursereqs.schemas.requirements import (
    THROWAWAY,
    ChoiceRequirement,
    CollectionRequirement,
    ConsentRequirement,
    CoreRequirement,
    CourseRequirement,
    GPARequirement,
    LimitRequirement,
    MajorMinorRequirement,
    MajorRequirement,
    MinorRequirement,
    OtherRequirement,
)


@pytest.fixture
def ctx(catalog):
    return ParseContext(catalog=catalog)


def course(icn, grade="D"):
    return CourseRequirement(icn=icn, minimum_grade=grade)


def test_matcher_table_is_ordered():
    assert isinstance(MATCHERS, tuple)
    assert MATCHERS[-1].pattern.pattern == r"^\W*@(\d+)\W*$"


@pytest.mark.parametrize("text", ["better", "1-2", "same as ENGL 1301", "Same as CS 1337"])
def test_throwaways(ctx, text):
    assert parse_group(ctx, text) == THROWAWAY


def test_class_standing_only_is_other(ctx):
    text = "Open to juniors and seniors only"
    assert parse_group(ctx, text) == OtherRequirement(description=text)


def test_any_combination_is_other(ctx):
    text = "6 semester credit hours in any combination of HIST 3301 and HIST 3302"
    assert parse_group(ctx, text) == OtherRequirement(description=text)


def test_majors_and_minors_only(ctx):
    assert parse_group(ctx, "JSOM majors and minors only") == MajorMinorRequirement(
        options=CollectionRequirement(
            name="OR",
            required=1,
            options=[MajorRequirement(major="JSOM"), MinorRequirement(minor="JSOM")],
        )
    )


def test_majors_and_minors_only_inside_and(ctx):
    result = parse_group(ctx, "CS1336 and JSOM majors and minors only")
    assert isinstance(result, CollectionRequirement)
    assert result.name == "AND"
    assert result.options[0] == course("000101")
    assert isinstance(result.options[1], MajorMinorRequirement)


def test_core_completion(ctx):
    assert parse_group(ctx, "Completion of a 010 core course") == CoreRequirement(core_flag="010", hours=-1)


def test_core_hours(ctx):
    assert parse_group(ctx, "Any 3 semester credit hour 090 core course") == CoreRequirement(core_flag="090", hours=3)


def test_credit_for_both(ctx):
    result = parse_group(ctx, "Credit cannot be received for both courses, CS 1336 and CS 1337")
    assert result == ChoiceRequirement(
        choices=CollectionRequirement(name="AND", required=2, options=[course("000101"), course("000102")])
    )


def test_credit_for_more_than_one(ctx):
    result = parse_group(ctx, "Credit cannot be received for more than one of the following: CS1336 or CS1337")
    assert result == ChoiceRequirement(
        choices=CollectionRequirement(name="OR", required=1, options=[course("000101"), course("000102")])
    )


def test_choice_without_collection_falls_back(ctx, caplog):
    text = "Credit cannot be received for both ABC and DEF"
    assert parse_group(ctx, text) == OtherRequirement(description=text)
    assert "collection" in caplog.text


def test_and_split(ctx):
    assert parse_group(ctx, "CS1336 and CS1337") == CollectionRequirement(
        name="AND", required=2, options=[course("000101"), course("000102")]
    )


def test_or_split(ctx):
    assert parse_group(ctx, "CS1336 or CS1337 or MATH 2413") == CollectionRequirement(
        name="OR", required=1, options=[course("000101"), course("000102"), course("000201")]
    )


def test_and_drops_throwaways(ctx):
    assert parse_group(ctx, "CS1336 and better") == course("000101")


def test_and_merges_adjacent_others(ctx):
    result = parse_group(ctx, "Foo and Bar and CS1336")
    assert result == CollectionRequirement(
        name="AND",
        required=2,
        options=[OtherRequirement(description="Foo and Bar"), course("000101")],
    )


def test_join_adjacent_others():
    reqs = [
        OtherRequirement(description="a"),
        OtherRequirement(description="b"),
        course("1"),
        OtherRequirement(description="c"),
    ]
    assert join_adjacent_others(reqs, " or ") == [
        OtherRequirement(description="a or b"),
        course("1"),
        OtherRequirement(description="c"),
    ]


def test_grade_or_better(ctx):
    assert parse_group(ctx, "CS 1337 with a grade of C or better") == course("000102", "C")


def test_minimum_grade(ctx):
    assert parse_group(ctx, "BIOL1 with a minimum grade of C") == course("000301", "C")
    assert parse_group(ctx, "MATH 2413 with a grade of at least a B-") == course("000201", "B-")


def test_grade_first(ctx):
    assert parse_group(ctx, "A grade of B- in MATH 2413") == course("000201", "B-")


def test_bare_course(ctx):
    assert parse_group(ctx, "CS1336") == course("000101")
    assert parse_group(ctx, "CS 1337)") == course("000102")


def test_unknown_course_is_other(ctx, caplog):
    assert parse_group(ctx, "HIST 1301") == OtherRequirement(description="HIST 1301")
    assert "HIST 1301" in caplog.text


def test_consent(ctx):
    assert parse_group(ctx, "Instructor consent required") == ConsentRequirement(granter="Instructor")


def test_limits(ctx):
    assert parse_group(ctx, "9 semester credit hours maximum") == LimitRequirement(max_hours=9)
    text = "Repeat Limit - This course may only be repeated for 9 semester credit hours maximum"
    assert parse_group(ctx, text) == LimitRequirement(max_hours=9)


def test_major_and_minor(ctx):
    assert parse_group(ctx, "Computer Science majors only") == MajorRequirement(major="Computer Science")
    assert parse_group(ctx, "Mathematics minor") == MinorRequirement(minor="Mathematics")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Minimum GPA of 2.5", 2.5),
        ("GPA of 3", 3.0),
        ("3.0 GPA", 3.0),
        ("A university grade point average of at least 2.75", 2.75),
    ],
)
def test_gpa(ctx, text, expected):
    assert parse_group(ctx, text) == GPARequirement(minimum=expected)


def test_malformed_gpa_is_fatal(ctx):
    with pytest.raises(RequisiteParseError) as exc:
        parse_group(ctx, "Minimum GPA of 2..5")
    assert exc.value.text == "Minimum GPA of 2..5"


def test_group_tags(catalog):
    arena = Arena.from_groups(["Instructor consent required"])
    arena.push(ConsentRequirement(granter="Instructor"))
    ctx = ParseContext(catalog=catalog, arena=arena)
    assert parse_group(ctx, "@0") == ConsentRequirement(granter="Instructor")
    assert parse_group(ctx, "@3") == THROWAWAY


def test_unmatched_text_is_kept(catalog):
    arena = Arena.from_groups(["or equivalent"])
    arena.push(OtherRequirement(description="or equivalent"))
    ctx = ParseContext(catalog=catalog, arena=arena)
    assert parse_group(ctx, "Sophomore standing") == OtherRequirement(description="Sophomore standing")
