"""Integration tests for InstructorService."""

import asyncio
import uuid

import pytest

from app.exceptions import (
    IllegalStateError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    ValidationFailedError,
)
from app.services.course_service import CourseService
from app.services.instructor_details_service import InstructorDetailsService
from app.services.instructor_service import InstructorService

DETAILS = {"youtube_channel": "https://youtube.com/@jdoe", "hobby": "Chess"}


@pytest.mark.asyncio
async def test_create_with_nested_details(instructor_service: InstructorService):
    # Act
    instructor = await instructor_service.create(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        instructor_details=DETAILS,
    )

    # Assert
    assert instructor.full_name == "John Doe"
    assert instructor.instructor_details is not None
    assert instructor.instructor_details.youtube_channel == DETAILS["youtube_channel"]
    assert instructor.instructor_details_id == instructor.instructor_details.id


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected_and_single_row_kept(
    instructor_service: InstructorService, instructor
):
    with pytest.raises(RecordAlreadyExistsError) as exc_info:
        await instructor_service.create(
            first_name="Other", last_name="Person", email="john.doe@example.com"
        )

    assert exc_info.value.field == "email"
    assert await instructor_service.count(email="john.doe@example.com") == 1


@pytest.mark.asyncio
async def test_invalid_fields_are_reported_together(
    instructor_service: InstructorService,
):
    with pytest.raises(ValidationFailedError) as exc_info:
        await instructor_service.create(
            first_name="",
            last_name="Doe",
            email="not-an-email",
            instructor_details={"youtube_channel": ""},
        )

    fields = {error.field for error in exc_info.value.errors}
    assert fields == {"first_name", "email", "youtube_channel"}
    assert await instructor_service.count() == 0


@pytest.mark.asyncio
async def test_update_round_trip_bumps_updated_at_only(
    instructor_service: InstructorService,
):
    # Arrange
    created = await instructor_service.create(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        instructor_details=DETAILS,
    )
    instructor_id = created.id
    fetched = await instructor_service.get_by_id_or_fail(instructor_id)
    created_at, updated_at = fetched.created_at, fetched.updated_at
    await asyncio.sleep(0.01)

    # Act
    await instructor_service.update(instructor_id, first_name="Johnny")
    refetched = await instructor_service.get_by_id_or_fail(instructor_id)

    # Assert
    assert refetched.first_name == "Johnny"
    assert refetched.created_at == created_at
    assert refetched.updated_at > updated_at
    assert refetched.instructor_details.hobby == "Chess"


@pytest.mark.asyncio
async def test_update_to_taken_email_is_rejected(
    instructor_service: InstructorService, instructor
):
    other = await instructor_service.create(
        first_name="Ann", last_name="Lee", email="ann.lee@example.com"
    )
    other_id = other.id

    with pytest.raises(RecordAlreadyExistsError):
        await instructor_service.update(other_id, email="john.doe@example.com")

    reloaded = await instructor_service.get_by_id_or_fail(other_id)
    assert reloaded.email == "ann.lee@example.com"


@pytest.mark.asyncio
async def test_update_with_details_updates_in_place_or_creates(
    instructor_service: InstructorService, instructor
):
    # No details yet: supplied details are created and linked
    updated = await instructor_service.update(
        instructor.id, instructor_details={"youtube_channel": "@first"}
    )
    details_id = updated.instructor_details.id

    # Linked details are updated in place
    updated = await instructor_service.update(
        instructor.id, instructor_details={"hobby": "Go"}
    )

    assert updated.instructor_details.id == details_id
    assert updated.instructor_details.youtube_channel == "@first"
    assert updated.instructor_details.hobby == "Go"


@pytest.mark.asyncio
async def test_delete_removes_owned_details(
    instructor_service: InstructorService,
    details_service: InstructorDetailsService,
):
    created = await instructor_service.create(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        instructor_details=DETAILS,
    )
    instructor_id, details_id = created.id, created.instructor_details.id

    await instructor_service.delete(instructor_id)

    assert await instructor_service.exists_by_id(instructor_id) is False
    with pytest.raises(RecordNotFoundError):
        await details_service.get_by_id_or_fail(details_id)


@pytest.mark.asyncio
async def test_delete_is_blocked_while_courses_exist(
    instructor_service: InstructorService, course_service: CourseService, course
):
    instructor_id, course_id = course.instructor_id, course.id

    with pytest.raises(IllegalStateError):
        await instructor_service.delete(instructor_id)

    assert await instructor_service.exists_by_id(instructor_id) is True
    remaining = await course_service.get_by_id_or_fail(course_id)
    assert remaining.instructor_id == instructor_id


@pytest.mark.asyncio
async def test_get_by_email(instructor_service: InstructorService, instructor):
    found = await instructor_service.get_by_email("john.doe@example.com")
    assert found.id == instructor.id

    with pytest.raises(RecordNotFoundError) as exc_info:
        await instructor_service.get_by_email("nobody@example.com")
    assert exc_info.value.field == "email"
    assert exc_info.value.value == "nobody@example.com"


@pytest.mark.asyncio
async def test_exists_by_email(instructor_service: InstructorService, instructor):
    assert await instructor_service.exists_by_email("john.doe@example.com") is True
    assert await instructor_service.exists_by_email("nobody@example.com") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["n D", "john", "JOHN", "JoHn", "doe", "John Doe"])
async def test_search_by_name_matches_parts_and_full_name(
    instructor_service: InstructorService, instructor, term
):
    await instructor_service.create(
        first_name="Ann", last_name="Lee", email="ann.lee@example.com"
    )

    results = await instructor_service.search_by_name(term)

    assert [i.id for i in results] == [instructor.id]


@pytest.mark.asyncio
async def test_with_and_without_details(instructor_service: InstructorService, instructor):
    with_details = await instructor_service.create(
        first_name="Ann",
        last_name="Lee",
        email="ann.lee@example.com",
        instructor_details=DETAILS,
    )

    assert [i.id for i in await instructor_service.get_with_details()] == [
        with_details.id
    ]
    assert [i.id for i in await instructor_service.get_without_details()] == [
        instructor.id
    ]


@pytest.mark.asyncio
async def test_attach_and_detach_details(
    instructor_service: InstructorService,
    details_service: InstructorDetailsService,
    instructor,
):
    # Arrange
    details = await details_service.create(youtube_channel="@standalone")
    details_id = details.id

    # Act - attach
    attached = await instructor_service.attach_details(instructor.id, details_id)

    # Assert
    assert attached.instructor_details.id == details_id
    assert await details_service.get_orphaned() == []

    # Act - detach
    detached = await instructor_service.detach_details(instructor.id)

    # Assert - details survive as an orphan
    assert detached.instructor_details is None
    assert [d.id for d in await details_service.get_orphaned()] == [details_id]


@pytest.mark.asyncio
async def test_attach_fails_when_instructor_already_has_details(
    instructor_service: InstructorService, details_service: InstructorDetailsService
):
    owner = await instructor_service.create(
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        instructor_details=DETAILS,
    )
    spare = await details_service.create(youtube_channel="@spare")

    with pytest.raises(RecordAlreadyExistsError):
        await instructor_service.attach_details(owner.id, spare.id)


@pytest.mark.asyncio
async def test_attach_fails_when_details_linked_elsewhere(
    instructor_service: InstructorService, instructor
):
    owner = await instructor_service.create(
        first_name="Ann",
        last_name="Lee",
        email="ann.lee@example.com",
        instructor_details=DETAILS,
    )

    with pytest.raises(RecordAlreadyExistsError):
        await instructor_service.attach_details(
            instructor.id, owner.instructor_details.id
        )


@pytest.mark.asyncio
async def test_attach_unknown_details_is_not_found(
    instructor_service: InstructorService, instructor
):
    with pytest.raises(RecordNotFoundError) as exc_info:
        await instructor_service.attach_details(instructor.id, uuid.uuid4())

    assert exc_info.value.model_name == "InstructorDetails"


@pytest.mark.asyncio
async def test_detach_without_details_is_illegal(
    instructor_service: InstructorService, instructor
):
    with pytest.raises(IllegalStateError):
        await instructor_service.detach_details(instructor.id)


@pytest.mark.asyncio
async def test_unknown_id_is_not_found_with_model_name(
    instructor_service: InstructorService,
):
    missing = uuid.uuid4()

    with pytest.raises(RecordNotFoundError) as exc_info:
        await instructor_service.update(missing, first_name="X")

    assert exc_info.value.model_name == "Instructor"
    assert exc_info.value.value == missing
