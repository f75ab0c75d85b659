"""Reviews API endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi import status as http_status

from app.schemas.common import CountResponse, DeletionResponse, ExistsResponse
from app.schemas.review import ReviewRequest, ReviewResponse
from app.services.review_service import ReviewService
from app.utils.dependencies import dependencies

router = APIRouter(tags=["Reviews"])


@router.post("/courses/{course_id}/reviews", status_code=http_status.HTTP_201_CREATED)
async def add_review_to_course(
    course_id: uuid.UUID,
    data: ReviewRequest,
    service: ReviewService = Depends(dependencies.review),
) -> ReviewResponse:
    """Add a review to a course.

    Args:
        course_id: Reviewed course; overrides any course_id in the body.
        data: Review data.
        service: ReviewService instance.

    Returns:
        Created review.
    """
    values = data.model_dump(exclude={"course_id"})
    review = await service.create(course_id=course_id, **values)
    return ReviewResponse.from_model(review)


@router.get("/courses/{course_id}/reviews")
async def get_course_reviews(
    course_id: uuid.UUID,
    newest_first: bool = Query(default=False),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    if newest_first:
        reviews = await service.get_by_course_ordered_by_date(course_id)
    else:
        reviews = await service.get_by_course(course_id)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/courses/{course_id}/reviews/count")
async def count_course_reviews(
    course_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> CountResponse:
    count = await service.count_by_course(course_id)
    return CountResponse(
        count=count,
        resource_type="Review",
        description=f"Reviews of course {course_id}",
    )


@router.get("/courses/{course_id}/students/{student_id}/reviews")
async def get_course_reviews_by_student(
    course_id: uuid.UUID,
    student_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.get_by_course_and_student(course_id, student_id)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/students/{student_id}/reviews")
async def get_student_reviews(
    student_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.get_by_student(student_id)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/students/{student_id}/reviews/count")
async def count_student_reviews(
    student_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> CountResponse:
    count = await service.count_by_student(student_id)
    return CountResponse(
        count=count,
        resource_type="Review",
        description=f"Reviews written by student {student_id}",
    )


@router.get("/reviews")
async def list_reviews(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.get_all(limit=limit, offset=offset)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/latest")
async def get_latest_reviews(
    limit: Optional[int] = Query(default=None, ge=1),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    """Get reviews across all courses, newest first.

    Args:
        limit: Maximum number of reviews; all when omitted.
        service: ReviewService instance.

    Returns:
        Reviews ordered by creation time descending.
    """
    reviews = await service.get_latest(limit=limit)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/search/comment")
async def search_reviews_by_comment(
    comment: str = Query(..., min_length=1),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.search_by_comment(comment)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/search/course")
async def search_reviews_by_course_title(
    title: str = Query(..., min_length=1),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.search_by_course_title(title)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/search/student/email")
async def search_reviews_by_student_email(
    email: str = Query(..., min_length=1),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.search_by_student_email(email)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/search/student/name")
async def search_reviews_by_student_name(
    name: str = Query(..., min_length=1),
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    """Search reviews by their author's first, last or full name.

    Args:
        name: Case-insensitive part of the student's name.
        service: ReviewService instance.

    Returns:
        Matching reviews, newest first. Anonymous reviews never match.
    """
    reviews = await service.search_by_student_name(name)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/instructor/{instructor_id}")
async def get_reviews_by_instructor(
    instructor_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> list[ReviewResponse]:
    reviews = await service.get_by_instructor(instructor_id)
    return [ReviewResponse.from_model(r) for r in reviews]


@router.get("/reviews/{review_id}")
async def get_review(
    review_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> ReviewResponse:
    review = await service.get_by_id_or_fail(review_id)
    return ReviewResponse.from_model(review)


@router.put("/reviews/{review_id}")
async def update_review(
    review_id: uuid.UUID,
    data: ReviewRequest,
    service: ReviewService = Depends(dependencies.review),
) -> ReviewResponse:
    """Update a review.

    A ``course_id`` other than the review's own course is rejected with 409.

    Args:
        review_id: Review ID.
        data: New review values.
        service: ReviewService instance.

    Returns:
        Updated review.
    """
    review = await service.update(review_id, **data.model_dump(exclude_none=True))
    return ReviewResponse.from_model(review)


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> DeletionResponse:
    await service.delete(review_id)
    return DeletionResponse.for_record(review_id, "Review")


@router.get("/reviews/{review_id}/exists")
async def review_exists(
    review_id: uuid.UUID,
    service: ReviewService = Depends(dependencies.review),
) -> ExistsResponse:
    exists = await service.exists_by_id(review_id)
    return ExistsResponse(exists=exists, resource_type="Review")
