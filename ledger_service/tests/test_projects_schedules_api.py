from __future__ import annotations

from datetime import datetime, timedelta, timezone

from common.mongo.types import utc_now
from ledger_service.app.models.project import ContentLength, ContentType, Project


def _project(account_id: str, topic: str) -> Project:
    now = utc_now()
    return Project(
        account_id=account_id,
        type=ContentType.EMAIL,
        topic=topic,
        tone="formal",
        keywords=["launch"],
        length=ContentLength.MEDIUM,
        content=f"Body about {topic}",
        created_at=now,
        updated_at=now,
    )


def test_projects_are_scoped_to_account(client, fixture) -> None:
    mine = fixture.projects.insert(_project("user-001", "first"))
    fixture.projects.insert(_project("user-001", "second"))
    other = fixture.projects.insert(_project("user-002", "other"))

    listing = client.get("/api/v1/projects/user-001").json()
    detail = client.get(f"/api/v1/projects/user-001/{mine.id}")
    foreign = client.get(f"/api/v1/projects/user-001/{other.id}")

    assert listing["total"] == 2
    assert [p["topic"] for p in listing["items"]] == ["second", "first"]
    assert detail.status_code == 200
    assert detail.json()["content"] == "Body about first"
    assert foreign.status_code == 404
    assert foreign.json()["detail"]["code"] == "project_not_found"


def test_schedule_and_list_in_publish_order(client) -> None:
    base = datetime(2030, 1, 1, 9, 0, tzinfo=timezone.utc)
    for offset, title in ((2, "later"), (1, "sooner")):
        resp = client.post(
            "/api/v1/schedules/user-001",
            json={
                "title": title,
                "content": "Post body",
                "platform": "linkedin",
                "publish_at": (base + timedelta(days=offset)).isoformat(),
            },
        )
        assert resp.status_code == 201
        assert resp.json()["status"] == "scheduled"

    items = client.get("/api/v1/schedules/user-001").json()

    assert [item["title"] for item in items] == ["sooner", "later"]


def test_naive_publish_time_is_treated_as_utc(client) -> None:
    resp = client.post(
        "/api/v1/schedules/user-001",
        json={
            "title": "naive",
            "content": "Post body",
            "platform": "twitter",
            "publish_at": "2030-05-01T10:00:00",
        },
    )

    published = datetime.fromisoformat(resp.json()["publish_at"].replace("Z", "+00:00"))
    assert published == datetime(2030, 5, 1, 10, 0, tzinfo=timezone.utc)
