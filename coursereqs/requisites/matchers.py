"""
Matcher table and group parser.

Parsing is bottom-up: parenthesized groups are parsed first and stored in the
chunk's arena, then larger groups refer back to them through ``@N`` tags. Each
group is matched against ``MATCHERS`` in order and the first hit decides what
the group means. Some handlers recurse (AND/OR splitting, Choice), and the
substitution handlers rewrite part of the group into a new tag before parsing
the rest of it again.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Sequence

from coursereqs.catalog import Catalog
from coursereqs.core.config import settings
from coursereqs.errors import CourseNotFoundError, RequisiteParseError
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
    Requirement,
    is_throwaway,
)

from .grouping import Arena, trim
from .patterns import R_GRADE, R_SUBJ_COURSE, R_SUBJ_COURSE_CAP, R_SUBJECT, R_YEARS

logger = logging.getLogger(__name__)

Captures = Sequence[str]


@dataclass
class ParseContext:
    catalog: Catalog
    arena: Arena = field(default_factory=Arena)
    default_grade: str = settings.default_min_grade


Handler = Callable[[ParseContext, str, Captures], Requirement]


@dataclass(frozen=True)
class Matcher:
    pattern: re.Pattern
    handler: Handler


def _to_int(text: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise RequisiteParseError(text, value) from None


def _to_float(text: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise RequisiteParseError(text, value) from None


# ---------------------------------------------------------------------------
# handlers
# ---------------------------------------------------------------------------

def other_matcher(ctx: ParseContext, group: str, captures: Captures = ()) -> Requirement:
    return OtherRequirement(description=ctx.arena.ungroup(group))


def throwaway_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return THROWAWAY


def join_adjacent_others(reqs: List[Requirement], joiner: str) -> List[Requirement]:
    """Collapse each run of consecutive Other requirements into one."""
    joined: List[Requirement] = []
    run: List[str] = []
    for req in reqs:
        if isinstance(req, OtherRequirement):
            if req.description:
                run.append(req.description)
            continue
        if run:
            joined.append(OtherRequirement(description=joiner.join(run)))
            run = []
        joined.append(req)
    if run:
        joined.append(OtherRequirement(description=joiner.join(run)))
    return joined


def _split_matcher(ctx: ParseContext, group: str, splitter: re.Pattern, name: str, joiner: str) -> Requirement:
    parsed = []
    for exp in splitter.split(group):
        req = parse_group(ctx, trim(exp))
        if not is_throwaway(req):
            parsed.append(req)

    parsed = join_adjacent_others(parsed, joiner)

    if len(parsed) > 1:
        required = len(parsed) if name == "AND" else 1
        return CollectionRequirement(name=name, required=required, options=parsed)
    if parsed:
        return parsed[0]
    return THROWAWAY


AND_RE = re.compile(r"\s+and\s+", re.I)
OR_RE = re.compile(r"\s+or\s+", re.I)


def and_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return _split_matcher(ctx, group, AND_RE, "AND", " and ")


def or_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return _split_matcher(ctx, group, OR_RE, "OR", " or ")


def _course(ctx: ParseContext, group: str, subject: str, number: str, grade: str) -> Requirement:
    try:
        icn = ctx.catalog.find_icn(subject, number)
    except CourseNotFoundError as e:
        logger.warning("%s", e)
        return other_matcher(ctx, group)
    return CourseRequirement(icn=icn, minimum_grade=grade)


def course_min_grade_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    # [subject, number, grade]
    return _course(ctx, group, captures[0], captures[1], captures[2])


def grade_first_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    # [grade, subject, number]
    return _course(ctx, group, captures[1], captures[2], captures[0])


def course_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return _course(ctx, group, captures[0], captures[1], ctx.default_grade)


def consent_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return ConsentRequirement(granter=captures[0])


def limit_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return LimitRequirement(max_hours=_to_int(group, captures[0]))


def major_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return MajorRequirement(major=captures[0])


def minor_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return MinorRequirement(minor=captures[0])


def major_minor_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    subject = captures[0]
    return MajorMinorRequirement(
        options=CollectionRequirement(
            name="OR",
            required=1,
            options=[MajorRequirement(major=subject), MinorRequirement(minor=subject)],
        )
    )


def core_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    # [hours, core flag]
    return CoreRequirement(core_flag=captures[1], hours=_to_int(group, captures[0]))


def core_completion_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return CoreRequirement(core_flag=captures[0], hours=-1)


def choice_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    parsed = parse_group(ctx, captures[0])
    if not isinstance(parsed, CollectionRequirement):
        logger.warning("choice matcher couldn't parse '%s' into a collection", captures[0])
        return other_matcher(ctx, group)
    return ChoiceRequirement(choices=parsed)


def gpa_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return GPARequirement(minimum=_to_float(group, captures[0]))


# a lone tag, possibly wrapped in punctuation left over from splitting
GROUP_TAG_RE = re.compile(r"^\W*@(\d+)\W*$")


def group_tag_matcher(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
    return ctx.arena.lookup(_to_int(group, captures[0]))


def substitution(parse_fnc: Handler) -> Handler:
    """
    Build a handler that replaces the first capture with a new group tag.

    ``parse_fnc`` receives the captured text and the remaining captures; its
    result is what the new tag resolves to. The rewritten group is then parsed
    again, so e.g. "(CS 1336 or CS 1337), and JSOM majors and minors only"
    becomes "(CS 1336 or CS 1337), and @N".
    """
    def handler(ctx: ParseContext, group: str, captures: Captures) -> Requirement:
        if not captures:
            return other_matcher(ctx, group)
        subtext = captures[0]
        req = parse_fnc(ctx, subtext, captures[1:])
        return parse_group(ctx, ctx.arena.substitute(group, subtext, req))
    return handler


# ---------------------------------------------------------------------------
# table
# ---------------------------------------------------------------------------

def _rx(pattern: str, flags: int = re.I) -> re.Pattern:
    return re.compile(pattern, flags)


# Order is precedence. Parentheses bind tighter than all of these since groups
# are parsed before the text around them.
MATCHERS = (
    # throwaways
    Matcher(_rx(r"^(?:better|\d-\d|same as.+)$"), throwaway_matcher),

    # * <YEAR> only
    Matcher(_rx(rf".+{R_YEARS}\s+only$"), other_matcher),

    # * in any combination of *
    Matcher(_rx(r".+\s+in\s+any\s+combination\s+of\s+.+"), other_matcher),

    # <SUBJECT> majors and minors only
    Matcher(
        _rx(rf"(\b({R_SUBJECT})\s+majors\s+and\s+minors\s+only)"),
        substitution(major_minor_matcher),
    ),

    # Completion of [a/an] <CORE CODE> core [course]
    Matcher(
        _rx(r"(Completion\s+of\s+(?:an?\s+)?(\d{3}).+core(?:\s+course)?)"),
        substitution(core_completion_matcher),
    ),

    # Credit cannot be received for both [courses][,] <EXPRESSION>
    Matcher(
        _rx(r"(Credit\s+cannot\s+be\s+received\s+for\s+both\s+(?:courses)?,?(.+))"),
        substitution(choice_matcher),
    ),

    # Credit cannot be received for more than one of *: <EXPRESSION>
    Matcher(
        _rx(r"(Credit\s+cannot\s+be\s+received\s+for\s+more\s+than\s+one\s+of.+:(.+))"),
        substitution(choice_matcher),
    ),

    Matcher(AND_RE, and_matcher),

    # <COURSE> with a [grade] [of] <GRADE> or better
    Matcher(
        _rx(rf"^({R_SUBJ_COURSE_CAP}\s+with\s+a(?:\s+grade)?(?:\s+of)?\s+({R_GRADE})\s+or\s+better)"),
        substitution(course_min_grade_matcher),
    ),

    Matcher(OR_RE, or_matcher),

    # <COURSE> with a [minimum] grade of [at least] [a] <GRADE>
    Matcher(
        _rx(rf"^{R_SUBJ_COURSE_CAP}\s+with\s+a\s+(?:minimum\s+)?grade\s+of\s+(?:at least\s+)?(?:a\s+)?({R_GRADE})$"),
        course_min_grade_matcher,
    ),

    # A grade of [at least] [a] <GRADE> in <COURSE>
    Matcher(
        _rx(rf"^A\s+grade\s+of(?:\s+at\s+least)?(?:\s+a)?\s+({R_GRADE})\s+in\s+{R_SUBJ_COURSE_CAP}$"),
        grade_first_matcher,
    ),

    # <COURSE>
    Matcher(_rx(rf"^\s*{R_SUBJ_COURSE_CAP}\s*$", 0), course_matcher),

    # <GRANTER> consent required
    Matcher(_rx(r"^(.+)\s+consent\s+required"), consent_matcher),

    # <HOURS> semester credit hours maximum
    Matcher(_rx(r"^(\d+)\s+semester\s+credit\s+hours\s+maximum$"), limit_matcher),

    # [<COURSE>] Repeat Limit - <COURSE>|This course may only be repeated for <HOURS> credit hours
    Matcher(
        _rx(
            rf"^(?:{R_SUBJ_COURSE}\s+)?Repeat\s+Limit\s+-\s+(?:{R_SUBJ_COURSE}|This\s+course)\s+may\s+only\s+be"
            rf"\s+repeated\s+for(?:\s+a\s+maximum\s+of)?\s+(\d+)\s+semester\s+cre?dit\s+hours(?:\s+maximum)?$",
            0,
        ),
        limit_matcher,
    ),

    # <SUBJECT> majors only
    Matcher(_rx(r"^(.+)\s+major(?:s\s+only)?$"), major_matcher),

    # <SUBJECT> minors only
    Matcher(_rx(r"^(.+)\s+minor(?:s\s+only)?$"), minor_matcher),

    # Any <HOURS> semester credit hour <CORE> course
    Matcher(
        _rx(r"^any\s+(\d+)\s+semester\s+credit\s+hour\s+(\d{3})(?:\s+@\d+)?\s+core(?:\s+course)?$"),
        core_matcher,
    ),

    # [Minimum] GPA of <GPA>
    Matcher(_rx(r"^(?:minimum\s+)?GPA\s+of\s+([0-9.]+)$"), gpa_matcher),

    # <GPA> GPA
    Matcher(_rx(r"^([0-9.]+) GPA$"), gpa_matcher),

    # A [university] grade point average of [at least] <GPA>
    Matcher(
        _rx(r"^a(?:\s+university)?\s+grade\s+point\s+average\s+of(?:\s+at\s+least)?\s+([0-9.]+)$"),
        gpa_matcher,
    ),

    # @N
    Matcher(GROUP_TAG_RE, group_tag_matcher),
)


def parse_group(ctx: ParseContext, group: str) -> Requirement:
    """Parse one group of text into a requirement using the first matcher that fits."""
    # drop any unmatched closing parens
    group = group.rstrip(")")
    for matcher in MATCHERS:
        match = matcher.pattern.search(group)
        if match is not None:
            result = matcher.handler(ctx, group, match.groups())
            logger.debug("'%s' -> %s", group, type(result).__name__)
            return result
    logger.debug("'%s' -> %s", group, OtherRequirement.__name__)
    return OtherRequirement(description=ctx.arena.ungroup(group))
