from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from coursereqs.catalog import Catalog, get_catalog
from coursereqs.errors import ParserError
from coursereqs.requisites.extraction import parse_catalog_requisites
from coursereqs.requisites.parser import parse_statement
from coursereqs.schemas.course import Course, CourseIn, StatementIn

router = APIRouter(prefix="/api/v1", tags=["requisites"])


def _normalize_code_to_store(code: str) -> str:
    return " ".join(code.replace("-", " ").strip().upper().split())


@router.post("/requisites/parse")
async def parse_requisite_text(body: StatementIn, catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    """Parse a single requisite statement against the courses registered so far."""
    try:
        parsed = parse_statement(catalog, body.text)
    except ParserError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"requisites": parsed.model_dump() if parsed is not None else None}


@router.post("/courses", status_code=201)
async def add_course(body: CourseIn, catalog: Catalog = Depends(get_catalog)) -> Course:
    course = Course(**body.model_dump())
    course.subject_prefix = _normalize_code_to_store(course.subject_prefix)
    return catalog.add(course)


@router.post("/courses/requisites")
async def parse_all_requisites(catalog: Catalog = Depends(get_catalog)) -> Dict[str, Any]:
    try:
        count = parse_catalog_requisites(catalog)
    except ParserError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"parsed": count}


@router.get("/courses/{subject}/{number}")
async def get_course(subject: str, number: str, catalog: Catalog = Depends(get_catalog)) -> Course:
    course = catalog.find(_normalize_code_to_store(subject), number.strip())
    if course is None:
        raise HTTPException(status_code=404, detail="course not found")
    return course
