"""Integration tests for BaseService with transaction management.

Uses a minimal model so that only the inherited behavior is exercised.
"""

import asyncio
import uuid

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    IntegrityViolationError,
    InvalidFilterError,
    RecordNotFoundError,
)
from app.services.base import BaseService


@pytest.fixture
def tag_service(db_session: AsyncSession, sample_tag_model):
    class TagService(BaseService[sample_tag_model]):
        model = sample_tag_model

    return TagService(db_session)


@pytest.mark.asyncio
async def test_create_commits_and_assigns_uuid(tag_service):
    """Create persists the record with a generated UUID and timestamps."""
    tag = await tag_service.create(name="python")

    assert isinstance(tag.id, uuid.UUID)
    assert tag.created_at is not None
    assert tag.updated_at is not None
    found = await tag_service.get_by_id(tag.id)
    assert found is not None
    assert found.name == "python"


@pytest.mark.asyncio
async def test_constraint_violation_rolls_back_and_maps_error(tag_service):
    """A unique violation surfaces as IntegrityViolationError and nothing is kept."""
    await tag_service.create(name="python")

    with pytest.raises(IntegrityViolationError) as exc_info:
        await tag_service.create(name="python")

    assert exc_info.value.model_name == "SampleTag"
    assert await tag_service.count() == 1


@pytest.mark.asyncio
async def test_rejected_write_expires_loaded_instances(tag_service):
    """After a rollback, held instances must be re-read through the service."""
    tag = await tag_service.create(name="python")
    tag_id = tag.id

    with pytest.raises(IntegrityViolationError):
        await tag_service.create(name="python")

    assert "name" in inspect(tag).expired_attributes
    reloaded = await tag_service.get_by_id_or_fail(tag_id)
    assert reloaded is tag
    assert reloaded.name == "python"


@pytest.mark.asyncio
async def test_get_by_id_or_fail_reports_model_field_and_value(tag_service):
    missing = uuid.uuid4()

    with pytest.raises(RecordNotFoundError) as exc_info:
        await tag_service.get_by_id_or_fail(missing)

    assert exc_info.value.model_name == "SampleTag"
    assert exc_info.value.field == "id"
    assert exc_info.value.value == missing


@pytest.mark.asyncio
async def test_get_all_paginates_in_creation_order(tag_service):
    for name in ("a", "b", "c", "d"):
        await tag_service.create(name=name)

    page = await tag_service.get_all(limit=2, offset=1)

    assert [tag.name for tag in page] == ["b", "c"]


@pytest.mark.asyncio
async def test_count_with_filters(tag_service):
    await tag_service.create(name="sql")
    await tag_service.create(name="orm")

    assert await tag_service.count(name="orm") == 1
    assert await tag_service.count(name="sql") == 1
    assert await tag_service.count() == 2


@pytest.mark.asyncio
async def test_invalid_filter_key_is_rejected(tag_service):
    with pytest.raises(InvalidFilterError):
        await tag_service.count(colour="red")


@pytest.mark.asyncio
async def test_update_changes_updated_at_only(tag_service):
    tag = await tag_service.create(name="old")
    created_at, updated_at = tag.created_at, tag.updated_at
    await asyncio.sleep(0.01)

    updated = await tag_service.update(tag.id, name="new")

    assert updated.name == "new"
    assert updated.created_at == created_at
    assert updated.updated_at > updated_at


@pytest.mark.asyncio
async def test_update_unknown_attribute_is_rejected(tag_service):
    tag = await tag_service.create(name="x")
    tag_id = tag.id

    with pytest.raises(InvalidFilterError):
        await tag_service.update(tag_id, colour="red")

    assert (await tag_service.get_by_id_or_fail(tag_id)).name == "x"


@pytest.mark.asyncio
async def test_update_rollback_on_constraint_violation(tag_service):
    await tag_service.create(name="taken")
    other = await tag_service.create(name="free")
    other_id = other.id

    with pytest.raises(IntegrityViolationError):
        await tag_service.update(other_id, name="taken")

    assert (await tag_service.get_by_id_or_fail(other_id)).name == "free"


@pytest.mark.asyncio
async def test_delete_and_exists(tag_service):
    tag = await tag_service.create(name="gone")
    tag_id = tag.id

    await tag_service.delete(tag_id)

    assert await tag_service.exists_by_id(tag_id) is False
    with pytest.raises(RecordNotFoundError):
        await tag_service.delete(tag_id)
