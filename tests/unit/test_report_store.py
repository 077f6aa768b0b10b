"""Unit tests for saved outlines and shared snapshots."""

import uuid

import pytest

from reportcraft.services.report_store import (
    get_report_outline,
    get_shared_report,
    list_public_reports,
    list_report_outlines,
    publish_shared_report,
    save_report_outline,
)

OWNER = "owner@example.com"


async def _save(db, outline, email=OWNER, topic="語りの分析"):
    return await save_report_outline(
        db,
        email,
        field="literature",
        topic=topic,
        word_count=4000,
        instructor_type="理論重視型",
        outline=outline,
    )


class TestReportOutlines:
    """Owner-only saved outlines."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, db_session, sample_outline):
        record = await _save(db_session, sample_outline)
        assert isinstance(record.id, uuid.UUID)
        assert record.created_at is not None

        loaded = await get_report_outline(db_session, record.id, OWNER)
        assert loaded is not None
        assert loaded.sections[1] == {"title": "本論", "points": ["X理論 の 説明", "先行研究 の 検討"]}
        assert loaded.core_question == sample_outline.core_question

    @pytest.mark.asyncio
    async def test_other_user_cannot_read(self, db_session, sample_outline):
        record = await _save(db_session, sample_outline)
        assert await get_report_outline(db_session, record.id, "other@example.com") is None

    @pytest.mark.asyncio
    async def test_unknown_id(self, db_session):
        assert await get_report_outline(db_session, uuid.uuid4(), OWNER) is None

    @pytest.mark.asyncio
    async def test_list_only_own(self, db_session, sample_outline):
        await _save(db_session, sample_outline, topic="one")
        await _save(db_session, sample_outline, topic="two")
        await _save(db_session, sample_outline, email="other@example.com", topic="three")

        records = await list_report_outlines(db_session, OWNER)
        assert sorted(r.topic for r in records) == ["one", "two"]


class TestSharedReports:
    """Durable share snapshots and the public gallery."""

    @pytest.mark.asyncio
    async def test_publish_and_get(self, db_session):
        await publish_shared_report(db_session, "abc-1234567", {"field": "law", "question": "Q"})
        assert await get_shared_report(db_session, "abc-1234567") == {"field": "law", "question": "Q"}
        assert await get_shared_report(db_session, "missing") is None

    @pytest.mark.asyncio
    async def test_publish_upserts(self, db_session):
        await publish_shared_report(db_session, "r1", {"field": "law", "question": "Q"})
        await publish_shared_report(db_session, "r1", {"field": "law", "question": "Q2"}, is_public=True)
        assert (await get_shared_report(db_session, "r1"))["question"] == "Q2"
        assert [r.id for r in await list_public_reports(db_session)] == ["r1"]

    @pytest.mark.asyncio
    async def test_gallery_filters(self, db_session):
        await publish_shared_report(db_session, "public", {"field": "law", "question": "Q"}, is_public=True)
        await publish_shared_report(db_session, "private", {"field": "law", "question": "Q"})
        await publish_shared_report(db_session, "incomplete", {"field": "law"}, is_public=True)

        reports = await list_public_reports(db_session)
        assert [(r.id, r.field, r.topic) for r in reports] == [("public", "law", "Q")]

    @pytest.mark.asyncio
    async def test_gallery_limit(self, db_session):
        for i in range(4):
            await publish_shared_report(db_session, f"r{i}", {"field": "law", "question": "Q"}, is_public=True)
        assert len(await list_public_reports(db_session, limit=2)) == 2
