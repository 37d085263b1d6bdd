"""Tests for results and reconciliation API endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from httpx import AsyncClient

from src.api.results import router
from src.identity.schemas import RosterEntry
from src.quiz.schemas import Answer, QuizResult
from src.repositories.results_repo import ResultsRepository


def _result(user_name: str, total: int = 18) -> QuizResult:
    return QuizResult(
        user_name=user_name,
        total_score=total,
        structure_score=10,
        written_score=total - 10,
        time_elapsed_seconds=1200,
    )


@pytest.mark.asyncio
async def test_list_results(
    client: AsyncClient, results_repo: ResultsRepository
) -> None:
    """Lists stored results newest first."""
    await results_repo.persist(_result("first"))
    await results_repo.persist(_result("second"))

    response = await client.get("/results/")

    assert response.status_code == 200
    assert [r["user_name"] for r in response.json()] == ["second", "first"]


@pytest.mark.asyncio
async def test_reconciliation_report(
    client: AsyncClient, results_repo: ResultsRepository
) -> None:
    """Report matches names and tracks completion."""
    await results_repo.persist(_result("budi santoso"))
    await results_repo.persist(_result("Budi S."))
    await results_repo.persist(_result("Keyla Putri Azzahraa"))

    response = await client.get("/results/reconciliation")

    assert response.status_code == 200
    data = response.json()
    submissions = data["submissions"]
    assert [s["result"]["user_name"] for s in submissions] == [
        "budi santoso",
        "Budi S.",
        "Keyla Putri Azzahraa",
    ]
    assert submissions[0]["match"]["matched_entry"]["name"] == "BUDI SANTOSO"
    assert submissions[0]["band"] == "Very High"
    assert submissions[1]["match"]["matched_entry"] is None
    assert submissions[2]["match"]["matched_entry"]["name"] == "KEYLA PUTRI AZZAHRA"
    assert submissions[2]["band"] == "High"
    assert data["completion"]["BUDI SANTOSO"] is True
    assert data["completion"]["ANRI RACHMAN"] is False
    assert data["unmatched_count"] == 1
    assert {e["name"] for e in data["pending"]} == {
        "AISYAH ALISSYA RAHMAH",
        "ANRI RACHMAN",
    }


def test_reconciliation_without_roster() -> None:
    """Missing roster returns 503."""
    repo = MagicMock()
    repo.list_results = AsyncMock(return_value=[])
    bare = FastAPI()
    bare.include_router(router)
    bare.state.results_repo = repo

    response = TestClient(bare).get("/results/reconciliation")

    assert response.status_code == 503


def test_reconciliation_with_mocked_store() -> None:
    """Report works against any result store."""
    repo = MagicMock()
    repo.list_results = AsyncMock(return_value=[])
    bare = FastAPI()
    bare.include_router(router)
    bare.state.results_repo = repo
    bare.state.roster = (RosterEntry(name="ANRI RACHMAN"),)

    response = TestClient(bare).get("/results/reconciliation")

    assert response.status_code == 200
    assert response.json()["completion"] == {"ANRI RACHMAN": False}
    repo.list_results.assert_awaited_once()


@pytest.mark.asyncio
async def test_answer_key(client: AsyncClient) -> None:
    """Answer key lists all 30 questions in order."""
    response = await client.get("/results/answer-key")

    assert response.status_code == 200
    data = response.json()
    assert [q["id"] for q in data] == list(range(1, 31))
    assert data[0]["correct_answer"] == "B"
    assert data[15]["section"] == "Written Expression"


@pytest.mark.asyncio
async def test_review_stored_result(
    client: AsyncClient, results_repo: ResultsRepository
) -> None:
    """A stored result can be reviewed against the answer key."""
    stored = await results_repo.persist(
        QuizResult(
            user_name="Anri Rachman",
            total_score=1,
            structure_score=0,
            written_score=1,
            time_elapsed_seconds=600,
            answers=(Answer(question_id=16, value="A"),),
        )
    )

    response = await client.get(f"/results/{stored.id}/review")

    assert response.status_code == 200
    data = response.json()
    assert data["user_name"] == "Anri Rachman"
    assert data["questions"][15]["is_correct"] is True
    assert data["sections"][1]["correct"] == 1


@pytest.mark.asyncio
async def test_review_unknown_result(client: AsyncClient) -> None:
    """Unknown result ids return 404."""
    response = await client.get("/results/999/review")

    assert response.status_code == 404
