"""
Pytest fixtures for ReportCraft tests.
"""

import os
from typing import AsyncGenerator

# Tests never reach OpenAI unless a test opts in explicitly
os.environ["OPENAI_API_KEY"] = ""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from reportcraft.config import get_settings
from reportcraft.engines.outline.templates import TemplateItem
from reportcraft.engines.outline.types import ReportOutline, Section
from reportcraft.models import Base

get_settings.cache_clear()


@pytest_asyncio.fixture(scope="function")
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh SQLite file database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def configured_openai(monkeypatch):
    """Settings with a non-placeholder OpenAI key."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def sample_items() -> list:
    """Two template items pulling in opposite directions."""
    return [
        TemplateItem(text="A理論の検証", weight_theory=5, weight_practical=1),
        TemplateItem(text="B実務の事例", weight_theory=1, weight_practical=5),
    ]


@pytest.fixture
def literature_body_outline() -> list:
    """An outline whose 本論 holds the top literature point."""
    return [
        Section(title="序論", points=["作品の成立背景と同時代の文学的状況を確認する"]),
        Section(title="本論", points=["語りの構造と視点人物の機能を分析する"]),
        Section(title="結論", points=[]),
    ]


@pytest.fixture
def sample_outline() -> ReportOutline:
    return ReportOutline(
        sections=[
            Section(title="序論", points=["問題の 背景 を 整理する"]),
            Section(title="本論", points=["X理論 の 説明", "先行研究 の 検討"]),
            Section(title="結論", points=["議論 の 総括"]),
        ],
        core_question="この作品の解釈はどのような根拠によって妥当といえるのか？",
    )
