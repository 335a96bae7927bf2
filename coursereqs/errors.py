class ParserError(Exception):
    """Base class for conditions that abort a whole parsing run."""


class RequisiteParseError(ParserError):
    """A numeral inside a requisite statement could not be parsed."""

    def __init__(self, text: str, value: str):
        self.text = text
        self.value = value
        super().__init__(f"malformed number '{value}' in requisite text '{text}'")


class CatalogYearError(ParserError):
    """An academic session code did not map to a catalog year."""

    def __init__(self, session_name: str):
        self.session_name = session_name
        super().__init__(f"invalid academic session '{session_name}'")


class CourseNotFoundError(LookupError):
    """Raised by the catalog when no registered course has the subject/number."""

    def __init__(self, subject: str, number: str):
        self.subject = subject
        self.number = number
        super().__init__(f"couldn't find an ICN for {subject} {number}")


class CourseFormatError(ParserError):
    """A course page is missing the section id or course number it needs."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"unrecognized course identifier '{value}'")
