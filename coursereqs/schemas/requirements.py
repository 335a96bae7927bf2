"""
Requirement node model.

Every matcher in the requisite parser returns one of these. They serialize to
JSON tagged by ``type`` so a stored tree can be loaded back with
``RequirementAdapter.validate_python``.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class CourseRequirement(BaseModel):
    type: Literal["course"] = "course"
    icn: str
    minimum_grade: str


class ConsentRequirement(BaseModel):
    type: Literal["consent"] = "consent"
    granter: str


class LimitRequirement(BaseModel):
    type: Literal["limit"] = "limit"
    max_hours: int


class MajorRequirement(BaseModel):
    type: Literal["major"] = "major"
    major: str


class MinorRequirement(BaseModel):
    type: Literal["minor"] = "minor"
    minor: str


class CoreRequirement(BaseModel):
    type: Literal["core"] = "core"
    core_flag: str
    # -1 means "complete the core", no hour count
    hours: int


class GPARequirement(BaseModel):
    type: Literal["gpa"] = "gpa"
    minimum: float
    subset: str = ""


class OtherRequirement(BaseModel):
    type: Literal["other"] = "other"
    description: str
    condition: str = ""


class ThrowawayRequirement(BaseModel):
    type: Literal["throwaway"] = "throwaway"


class CollectionRequirement(BaseModel):
    type: Literal["collection"] = "collection"
    name: Literal["AND", "OR", "REQUISITES"]
    required: int
    options: List["Requirement"] = Field(default_factory=list)


class MajorMinorRequirement(BaseModel):
    type: Literal["major_minor"] = "major_minor"
    options: CollectionRequirement


class ChoiceRequirement(BaseModel):
    type: Literal["choice"] = "choice"
    choices: CollectionRequirement


Requirement = Annotated[
    Union[
        CourseRequirement,
        ConsentRequirement,
        LimitRequirement,
        MajorRequirement,
        MinorRequirement,
        MajorMinorRequirement,
        CoreRequirement,
        ChoiceRequirement,
        GPARequirement,
        OtherRequirement,
        ThrowawayRequirement,
        CollectionRequirement,
    ],
    Field(discriminator="type"),
]

CollectionRequirement.model_rebuild()
MajorMinorRequirement.model_rebuild()
ChoiceRequirement.model_rebuild()

RequirementAdapter: TypeAdapter[Requirement] = TypeAdapter(Requirement)

THROWAWAY = ThrowawayRequirement()


def is_throwaway(req) -> bool:
    return isinstance(req, ThrowawayRequirement)
