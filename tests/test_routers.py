# =============================================================================
# tests/test_routers.py - Resource Endpoint Tests
# =============================================================================
# Tests for the /api routers. Services are patched with AsyncMock and the
# database session is a MagicMock (see conftest.py), so these cover HTTP
# wiring: status codes, envelopes, auth, and validation.
# =============================================================================

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.exceptions import NotFoundError
from core.services.admin_service import AdminService
from core.services.blog_service import blog_service
from core.services.contact_service import contact_service, newsletter_service
from core.services.directory_service import member_service, ministry_service
from core.services.event_service import event_service
from core.services.prayer_service import prayer_service
from core.services.user_service import user_service
from core.tables import PrayerStatus, UserRole


@pytest.fixture
def event_record(make_record):
    return make_record(
        title="Sunday Worship",
        description=None,
        location="Main Sanctuary",
        starts_at=datetime(2024, 6, 2, 10, 0, tzinfo=timezone.utc),
        ends_at=None,
        image_url=None,
        is_published=True,
    )


# =============================================================================
# Events
# =============================================================================

class TestEvents:
    """Tests for /api/events."""

    def test_list_is_paginated(self, client, event_record):
        with patch.object(event_service, "list_events", AsyncMock(return_value=([event_record], 1))) as list_events:
            response = client.get("/api/events?page=2&page_size=5&upcoming=true")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 1
        assert body["page"] == 2
        assert body["data"][0]["title"] == "Sunday Worship"
        assert list_events.await_args.kwargs == {"page": 2, "page_size": 5, "upcoming": True}

    def test_page_size_is_capped(self, client):
        response = client.get("/api/events?page_size=500")

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unpublished_event_is_hidden(self, client, event_record):
        event_record.is_published = False

        with patch.object(event_service, "get", AsyncMock(return_value=event_record)):
            response = client.get(f"/api/events/{event_record.id}")

        assert response.status_code == 404
        assert response.json()["message"] == "Event not found"

    def test_create_requires_login(self, client):
        response = client.post("/api/events", json={"title": "Picnic", "starts_at": "2024-07-04T12:00:00Z"})

        assert response.status_code == 401

    def test_create_requires_admin(self, client, as_member):
        response = client.post("/api/events", json={"title": "Picnic", "starts_at": "2024-07-04T12:00:00Z"})

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_admin_creates_event(self, client, as_admin, event_record):
        with patch.object(event_service, "create", AsyncMock(return_value=event_record)):
            response = client.post(
                "/api/events",
                json={"title": "Sunday Worship", "starts_at": "2024-06-02T10:00:00Z"},
            )

        assert response.status_code == 201
        assert response.json()["message"] == "Event created"

    def test_end_before_start_rejected(self, client, as_admin):
        response = client.post(
            "/api/events",
            json={
                "title": "Backwards",
                "starts_at": "2024-06-02T10:00:00Z",
                "ends_at": "2024-06-02T09:00:00Z",
            },
        )

        assert response.status_code == 422

    def test_delete_missing_event(self, client, as_admin):
        missing = uuid4()

        with patch.object(event_service, "delete", AsyncMock(side_effect=NotFoundError("Event", missing))):
            response = client.delete(f"/api/events/{missing}")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": "Event not found",
            "code": "NOT_FOUND",
            "details": {"resource": "Event", "id": str(missing)},
        }


# =============================================================================
# Prayer
# =============================================================================

class TestPrayer:
    """Tests for /api/prayer."""

    def test_submit_is_public(self, client):
        with patch.object(prayer_service, "create", AsyncMock()) as create:
            response = client.post(
                "/api/prayer",
                json={"name": "Ruth", "request": "Healing for my mother", "is_public": True},
            )

        assert response.status_code == 201
        assert response.json()["success"] is True
        create.assert_awaited_once()

    def test_wall_hides_anonymous_names(self, client, make_record):
        records = [
            make_record(name="Ruth", email="ruth@example.org", request="Healing",
                        is_anonymous=False, is_public=True, status=PrayerStatus.APPROVED),
            make_record(name="Naomi", email="naomi@example.org", request="Guidance",
                        is_anonymous=True, is_public=True, status=PrayerStatus.ANSWERED),
        ]

        with patch.object(prayer_service, "list_public", AsyncMock(return_value=(records, 2))):
            response = client.get("/api/prayer")

        data = response.json()["data"]
        assert [entry["name"] for entry in data] == ["Ruth", None]
        assert all("email" not in entry for entry in data)

    def test_admin_sets_status(self, client, as_admin, make_record):
        record = make_record(name=None, email=None, request="Peace", is_anonymous=True,
                             is_public=False, status=PrayerStatus.APPROVED)

        with patch.object(prayer_service, "set_status", AsyncMock(return_value=record)) as set_status:
            response = client.patch(f"/api/prayer/{record.id}/status", json={"status": "approved"})

        assert response.status_code == 200
        assert response.json()["message"] == "Prayer request marked approved"
        assert set_status.await_args.args[2] is PrayerStatus.APPROVED


# =============================================================================
# Contact / Newsletter
# =============================================================================

class TestContact:
    """Tests for /api/contact and /api/newsletter."""

    def test_contact_form(self, client):
        with patch.object(contact_service, "create", AsyncMock()):
            response = client.post(
                "/api/contact",
                json={"name": "Boaz", "email": "boaz@example.org", "message": "What time is service?"},
            )

        assert response.status_code == 201

    def test_contact_form_requires_valid_email(self, client):
        response = client.post(
            "/api/contact",
            json={"name": "Boaz", "email": "not-an-email", "message": "Hello"},
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "email"

    @pytest.mark.parametrize("created,status", [(True, 201), (False, 200)])
    def test_subscribe_status_codes(self, client, make_record, created, status):
        subscriber = make_record(email="ruth@example.org", name=None, is_active=True, unsubscribed_at=None)

        with patch.object(newsletter_service, "subscribe", AsyncMock(return_value=(subscriber, created))):
            response = client.post("/api/newsletter/subscribe", json={"email": "ruth@example.org"})

        assert response.status_code == status
        assert response.json()["data"]["email"] == "ruth@example.org"

    def test_subscribers_list_is_admin_only(self, client, as_member):
        response = client.get("/api/newsletter/subscribers")

        assert response.status_code == 403


# =============================================================================
# Users / Members / Admin
# =============================================================================

class TestUsers:
    """Tests for /api/users."""

    def test_admin_cannot_demote_self(self, client, as_admin):
        with patch.object(user_service, "update", AsyncMock()) as update:
            response = client.patch(f"/api/users/{as_admin.id}", json={"role": "member"})

        assert response.status_code == 403
        update.assert_not_awaited()

    def test_admin_cannot_delete_self(self, client, as_admin):
        response = client.delete(f"/api/users/{as_admin.id}")

        assert response.status_code == 403

    def test_admin_promotes_other_user(self, client, as_admin, make_record):
        other = make_record(email="deacon@example.org", full_name="Deacon", role=UserRole.ADMIN, is_active=True)

        with patch.object(user_service, "update", AsyncMock(return_value=other)):
            response = client.patch(f"/api/users/{other.id}", json={"role": "admin"})

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "admin"


class TestMembers:
    """Tests for /api/members."""

    def test_unknown_ministry_rejected(self, client, as_admin):
        ministry_id = uuid4()

        with patch.object(ministry_service, "get", AsyncMock(side_effect=NotFoundError("Ministry", ministry_id))), \
                patch.object(member_service, "create", AsyncMock()) as create:
            response = client.post(
                "/api/members",
                json={"first_name": "Lydia", "last_name": "Thyatira", "ministry_id": str(ministry_id)},
            )

        assert response.status_code == 404
        create.assert_not_awaited()

    def test_search_passes_query(self, client, as_admin):
        with patch.object(member_service, "search", AsyncMock(return_value=([], 0))) as search:
            response = client.get("/api/members?q=lydia")

        assert response.status_code == 200
        assert search.await_args.kwargs["query"] == "lydia"


class TestAdmin:
    """Tests for /api/admin."""

    def test_stats(self, client, as_admin):
        stats = {"users": 3, "pending_prayer_requests": 2}

        with patch.object(AdminService, "dashboard_stats", AsyncMock(return_value=stats)):
            response = client.get("/api/admin/stats")

        assert response.status_code == 200
        assert response.json()["data"] == stats

    def test_stats_requires_admin(self, client, as_member):
        response = client.get("/api/admin/stats")

        assert response.status_code == 403


# =============================================================================
# Blog
# =============================================================================

class TestBlogs:
    """Tests for /api/blogs."""

    def test_get_by_slug(self, client, make_record):
        post = make_record(
            title="Easter Reflections",
            slug="easter-reflections",
            excerpt=None,
            content="He is risen",
            cover_image_url=None,
            is_published=True,
            author_id=None,
            published_at=datetime(2024, 3, 31, tzinfo=timezone.utc),
        )

        with patch.object(blog_service, "get_published_by_slug", AsyncMock(return_value=post)):
            response = client.get("/api/blogs/easter-reflections")

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "easter-reflections"

    def test_create_records_author(self, client, as_admin, make_record):
        post = make_record(
            title="Hello", slug="hello", excerpt=None, content="First post",
            cover_image_url=None, is_published=False, author_id=as_admin.id, published_at=None,
        )

        with patch.object(blog_service, "create_post", AsyncMock(return_value=post)) as create_post:
            response = client.post("/api/blogs", json={"title": "Hello", "content": "First post"})

        assert response.status_code == 201
        assert create_post.await_args.kwargs["author_id"] == as_admin.id
