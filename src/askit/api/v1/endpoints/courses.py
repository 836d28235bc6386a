# src/askit/api/v1/endpoints/courses.py
"""Course endpoints."""

from fastapi import APIRouter, status

from askit.api.responses import SuccessResponse, success
from askit.api.v1.dependencies import AdminDep, SessionDep
from askit.models import Course
from askit.schemas.user import CourseCreate, CourseRead
from askit.services.records import get_or_404, list_rows, remove, save

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=SuccessResponse[list[CourseRead]])
def list_courses(db: SessionDep) -> SuccessResponse[list[CourseRead]]:
    return success([CourseRead.model_validate(c) for c in list_rows(db, Course)])


@router.get("/{course_id}", response_model=SuccessResponse[CourseRead])
def get_course(course_id: int, db: SessionDep) -> SuccessResponse[CourseRead]:
    return success(CourseRead.model_validate(get_or_404(db, Course, course_id, "Course")))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[CourseRead],
)
def create_course(
    payload: CourseCreate, db: SessionDep, _: AdminDep
) -> SuccessResponse[CourseRead]:
    course = save(db, Course(title=payload.title))
    return success(CourseRead.model_validate(course))


@router.delete("/{course_id}", response_model=SuccessResponse[CourseRead])
def delete_course(course_id: int, db: SessionDep, _: AdminDep) -> SuccessResponse[CourseRead]:
    """Delete a course; enrolled users keep their accounts without a course."""
    course = get_or_404(db, Course, course_id, "Course")
    data = CourseRead.model_validate(course)
    remove(db, course)
    return success(data)
