# =============================================================================
# tests/test_services.py - Service Layer Tests
# =============================================================================
# Tests for core/services with a mocked AsyncSession.
# Query building is real SQLAlchemy; only execution is mocked.
# =============================================================================

import asyncio
from types import SimpleNamespace
from typing import get_args, get_type_hints
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import ColumnElement

from app.exceptions import ConflictError, NotFoundError
from core.models.contact import NewsletterSubscribe
from core.models.content import BlogPostCreate, BlogPostUpdate, slugify
from core.models.event import EventCreate, EventUpdate
from core.services.admin_service import AdminService
from core.services.blog_service import blog_service
from core.services.contact_service import newsletter_service
from core.services.crud_service import CrudService
from core.tables import Event


def make_session():
    session = MagicMock(name="session")
    session.add = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    session.execute = AsyncMock()
    return session


def scalar_result(value):
    result = MagicMock()
    result.scalar_one.return_value = value
    return result


def rows_result(rows):
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.fixture
def events():
    return CrudService(Event, "Event", order_by=Event.starts_at)


@pytest.fixture
def event_data():
    return EventCreate(
        title="Sunday Service",
        starts_at="2024-06-02T10:00:00Z",
        ends_at="2024-06-02T12:00:00Z",
    )


class TestCrudService:
    """Tests for CrudService."""

    def test_annotations_refer_to_builtin_list(self):
        # CrudService.list must not shadow the builtin in its own annotations
        hints = get_type_hints(CrudService.count)

        assert list[ColumnElement[bool]] in get_args(hints["conditions"])

    def test_list_returns_page_and_total(self, events):
        session = make_session()
        rows = [SimpleNamespace(id=uuid4()), SimpleNamespace(id=uuid4())]
        session.execute.side_effect = [scalar_result(12), rows_result(rows)]

        records, total = asyncio.run(events.list(session, page=3, page_size=2))

        assert records == rows
        assert total == 12
        page_query = session.execute.await_args_list[1].args[0]
        compiled = page_query.compile(compile_kwargs={"literal_binds": True})
        assert "LIMIT 2 OFFSET 4" in str(compiled)
        assert "ORDER BY events.starts_at" in str(compiled)

    def test_get_missing_raises_not_found(self, events):
        session = make_session()
        session.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            asyncio.run(events.get(session, uuid4()))
        assert exc_info.value.message == "Event not found"
        assert exc_info.value.status_code == 404

    def test_create_commits_and_refreshes(self, events, event_data):
        session = make_session()

        record = asyncio.run(events.create(session, event_data))

        assert isinstance(record, Event)
        assert record.title == "Sunday Service"
        session.add.assert_called_once_with(record)
        session.commit.assert_awaited_once()
        session.refresh.assert_awaited_once_with(record)

    def test_unique_violation_becomes_conflict(self, events, event_data):
        session = make_session()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(ConflictError):
            asyncio.run(events.create(session, event_data))
        session.rollback.assert_awaited_once()

    def test_update_only_touches_set_fields(self, events):
        session = make_session()
        existing = SimpleNamespace(id=uuid4(), title="Old", location="Hall")
        session.get.return_value = existing

        result = asyncio.run(events.update(session, existing.id, EventUpdate(title="New")))

        assert result.title == "New"
        assert result.location == "Hall"
        session.commit.assert_awaited_once()

    def test_empty_update_skips_commit(self, events):
        session = make_session()
        existing = SimpleNamespace(id=uuid4(), title="Old")
        session.get.return_value = existing

        asyncio.run(events.update(session, existing.id, EventUpdate()))

        session.commit.assert_not_awaited()

    def test_delete(self, events):
        session = make_session()
        existing = SimpleNamespace(id=uuid4())
        session.get.return_value = existing

        asyncio.run(events.delete(session, existing.id))

        session.delete.assert_awaited_once_with(existing)
        session.commit.assert_awaited_once()


class TestBlogService:
    """Tests for slug handling in BlogService."""

    def test_slugify(self):
        assert slugify("Easter Reflections: Week 1") == "easter-reflections-week-1"
        assert slugify("¡¿!?") == "post"

    def test_generated_slug_is_made_unique(self):
        taken = SimpleNamespace(id=uuid4())
        get_by = AsyncMock(side_effect=[taken, taken, None])
        create = AsyncMock(side_effect=lambda session, values: values)

        with patch.object(blog_service, "get_by", get_by), patch.object(blog_service, "create", create):
            values = asyncio.run(blog_service.create_post(
                None,
                BlogPostCreate(title="Easter Reflections", content="He is risen", is_published=True),
                author_id=None,
            ))

        assert values["slug"] == "easter-reflections-3"
        assert values["published_at"] is not None

    def test_explicit_slug_conflict(self):
        get_by = AsyncMock(return_value=SimpleNamespace(id=uuid4()))

        with patch.object(blog_service, "get_by", get_by):
            with pytest.raises(ConflictError):
                asyncio.run(blog_service.create_post(
                    None,
                    BlogPostCreate(title="Hello", slug="hello", content="..."),
                ))

    def test_invalid_slug_rejected(self):
        with pytest.raises(ValueError):
            BlogPostUpdate(slug="Not A Slug")

    def test_publishing_draft_stamps_published_at(self):
        post = SimpleNamespace(id=uuid4(), slug="draft", published_at=None)
        update = AsyncMock(side_effect=lambda session, post_id, values: values)

        with patch.object(blog_service, "get", AsyncMock(return_value=post)), \
                patch.object(blog_service, "update", update):
            values = asyncio.run(blog_service.update_post(None, post.id, BlogPostUpdate(is_published=True)))

        assert values["is_published"] is True
        assert values["published_at"] is not None


class TestNewsletterService:
    """Tests for subscribe / unsubscribe."""

    def test_new_address_is_created(self):
        created = SimpleNamespace(id=uuid4())

        with patch.object(newsletter_service, "get_by", AsyncMock(return_value=None)), \
                patch.object(newsletter_service, "create", AsyncMock(return_value=created)) as create:
            subscriber, was_created = asyncio.run(
                newsletter_service.subscribe(None, NewsletterSubscribe(email="Ruth@Example.org"))
            )

        assert subscriber is created
        assert was_created is True
        assert create.await_args.args[1]["email"] == "ruth@example.org"

    def test_existing_address_is_reactivated(self):
        existing = SimpleNamespace(id=uuid4(), is_active=False)

        with patch.object(newsletter_service, "get_by", AsyncMock(return_value=existing)), \
                patch.object(newsletter_service, "update", AsyncMock(return_value=existing)) as update:
            _, was_created = asyncio.run(
                newsletter_service.subscribe(None, NewsletterSubscribe(email="ruth@example.org"))
            )

        assert was_created is False
        assert update.await_args.args[2] == {"is_active": True, "unsubscribed_at": None}

    def test_unsubscribe_unknown_address(self):
        with patch.object(newsletter_service, "get_by", AsyncMock(return_value=None)):
            with pytest.raises(NotFoundError):
                asyncio.run(newsletter_service.unsubscribe(None, "nobody@example.org"))


class TestAdminService:
    """Tests for dashboard counters."""

    def test_dashboard_stats(self):
        session = make_session()
        session.execute.return_value = scalar_result(4)

        stats = asyncio.run(AdminService.dashboard_stats(session))

        assert set(stats) == {
            "users",
            "members",
            "ministries",
            "events",
            "blog_posts",
            "published_blog_posts",
            "pending_prayer_requests",
            "unread_contact_messages",
            "active_subscribers",
        }
        assert all(value == 4 for value in stats.values())
