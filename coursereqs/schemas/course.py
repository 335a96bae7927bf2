import uuid

from pydantic import BaseModel, Field

from .requirements import CollectionRequirement


def _new_id() -> str:
    return uuid.uuid4().hex


class Course(BaseModel):
    id: str = Field(default_factory=_new_id)
    subject_prefix: str
    course_number: str
    internal_course_number: str
    catalog_year: str = ""
    title: str = ""
    description: str = ""
    enrollment_reqs: str | None = None
    school: str = ""
    credit_hours: str = ""
    class_level: str = ""
    activity_type: str = ""
    grading: str = ""
    lecture_contact_hours: str = ""
    laboratory_contact_hours: str = ""
    offering_frequency: str = ""

    # written by the requisite parser only
    prerequisites: CollectionRequirement | None = None
    corequisites: CollectionRequirement | None = None
    co_or_pre_requisites: CollectionRequirement | None = None

    @property
    def code(self) -> str:
        return f"{self.subject_prefix} {self.course_number}"


class CourseIn(BaseModel):
    """Payload for registering a course through the API."""
    subject_prefix: str
    course_number: str
    internal_course_number: str
    catalog_year: str = ""
    title: str = ""
    description: str = ""
    enrollment_reqs: str | None = None


class StatementIn(BaseModel):
    text: str
