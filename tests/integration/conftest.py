"""Service fixtures shared by integration tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.course_service import CourseService
from app.services.instructor_details_service import InstructorDetailsService
from app.services.instructor_service import InstructorService
from app.services.review_service import ReviewService
from app.services.student_service import StudentService


@pytest.fixture
def instructor_service(db_session: AsyncSession) -> InstructorService:
    return InstructorService(db_session)


@pytest.fixture
def details_service(db_session: AsyncSession) -> InstructorDetailsService:
    return InstructorDetailsService(db_session)


@pytest.fixture
def student_service(db_session: AsyncSession) -> StudentService:
    return StudentService(db_session)


@pytest.fixture
def course_service(db_session: AsyncSession) -> CourseService:
    return CourseService(db_session)


@pytest.fixture
def review_service(db_session: AsyncSession) -> ReviewService:
    return ReviewService(db_session)


@pytest.fixture
async def instructor(instructor_service: InstructorService):
    """Instructor John Doe without details."""
    return await instructor_service.create(
        first_name="John", last_name="Doe", email="john.doe@example.com"
    )


@pytest.fixture
async def course(course_service: CourseService, instructor):
    return await course_service.create(
        title="Linear Algebra", description="Vectors", instructor_id=instructor.id
    )


@pytest.fixture
async def student(student_service: StudentService):
    return await student_service.create(
        first_name="Jane", last_name="Roe", email="jane.roe@example.com"
    )
