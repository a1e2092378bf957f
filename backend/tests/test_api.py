import asyncio
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_embedding_provider, get_skill_taxonomy, get_vector_index
from api.router import limiter
from main import app
from services import gemini_client
from services.taxonomy_seeder import seed_taxonomy
from services.vector_index import InMemoryVectorIndex

from conftest import SKILL_COLLECTION, FailingEmbedder


@pytest.fixture
def api_index(taxonomy, category_embedder):
    index = InMemoryVectorIndex()
    asyncio.run(seed_taxonomy(
        taxonomy, category_embedder, index,
        collection=SKILL_COLLECTION, vector_size=category_embedder.dimension,
    ))
    return index


@pytest.fixture
def summary_prompts(monkeypatch):
    prompts = []

    async def fake_generate(prompt, system_instruction=None):
        prompts.append(prompt)
        return "Keep building projects."

    monkeypatch.setattr(gemini_client, "generate_text", fake_generate)
    return prompts


@pytest.fixture
def client(monkeypatch, taxonomy, category_embedder, api_index, summary_prompts):
    monkeypatch.setattr(limiter, "enabled", False)
    app.dependency_overrides[get_embedding_provider] = lambda: category_embedder
    app.dependency_overrides[get_vector_index] = lambda: api_index
    app.dependency_overrides[get_skill_taxonomy] = lambda: taxonomy
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["taxonomy_categories"] == 5
    assert isinstance(data["gemini_configured"], bool)


def test_skill_gaps(client, summary_prompts):
    response = client.post(
        "/skill-gaps",
        json={
            "user_goal": "I want to learn web development",
            "skills": {"HTML": "intermediate", "React.js": "beginner"},
            "user_name": "Ada",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"] == "Ada"
    assert data["categories_analyzed"] == 1
    assert data["summary"] == "Keep building projects."
    assert data["message"] == ""

    result = data["analysis"][0]
    assert result["matched_taxonomy_category"] == "Web Development"
    assert [s["name"] for s in result["skills"]["present"]] == ["HTML and CSS"]
    assert [s["name"] for s in result["skills"]["needs_improvement"]] == ["React"]
    assert len(result["skills"]["gaps"]) == 4
    assert all(g["priority"] == "high" for g in result["skills"]["gaps"])

    assert len(summary_prompts) == 1
    assert summary_prompts[0].startswith("User: Ada\nGoal: I want to learn web development\n")


def test_skill_gaps_profiles_use_different_limits(client):
    goal = "web development and databases"

    service = client.post("/skill-gaps", json={"user_goal": goal, "include_summary": False}).json()
    gap_finder = client.post(
        "/skill-gaps", json={"user_goal": goal, "include_summary": False, "profile": "gap_finder"},
    ).json()

    assert [r["matched_taxonomy_category"] for r in service["analysis"]] == ["Web Development"]
    assert [r["matched_taxonomy_category"] for r in gap_finder["analysis"]] == [
        "Web Development", "Databases",
    ]
    assert service["summary"] is None


def test_skill_gaps_no_relevant_categories(client, summary_prompts):
    response = client.post("/skill-gaps", json={"user_goal": "learn to bake sourdough bread"})
    assert response.status_code == 200
    data = response.json()
    assert data["analysis"] == []
    assert data["summary"] is None
    assert data["message"] == "No relevant categories found for this goal"
    assert summary_prompts == []


def test_skill_gaps_rejects_blank_goal(client):
    response = client.post("/skill-gaps", json={"user_goal": "   "})
    assert response.status_code == 400


def test_skill_gaps_rejects_missing_goal(client):
    response = client.post("/skill-gaps", json={"skills": {"Python": "expert"}})
    assert response.status_code == 422


def test_skill_gaps_rejects_long_goal(client):
    response = client.post("/skill-gaps", json={"user_goal": "web development " * 200})
    assert response.status_code == 400


def test_skill_gaps_embedding_failure(client):
    app.dependency_overrides[get_embedding_provider] = lambda: FailingEmbedder()
    response = client.post("/skill-gaps", json={"user_goal": "web development"})
    assert response.status_code == 502
    assert response.json()["detail"] == "Skill gap analysis failed at embedding stage"


def test_skill_gaps_search_failure(client):
    app.dependency_overrides[get_vector_index] = lambda: InMemoryVectorIndex()
    response = client.post("/skill-gaps", json={"user_goal": "web development"})
    assert response.status_code == 503
    assert response.json()["detail"] == "Skill gap analysis failed at search stage"


def test_search_skills(client):
    response = client.get("/skills/search", params={"q": "databases", "limit": 3})
    assert response.status_code == 200
    data = response.json()
    assert [r["rank"] for r in data] == [1, 2, 3]
    assert [r["skill"] for r in data] == ["SQL", "PostgreSQL", "NoSQL (MongoDB)"]
    assert data[0]["category"] == "Databases"


def test_search_skills_requires_query(client):
    assert client.get("/skills/search").status_code == 422


def test_skill_categories(client):
    response = client.get("/skills/categories")
    assert response.status_code == 200
    assert response.json() == [
        "AI & ML",
        "Data Structures & Algorithms(DSA)",
        "Databases",
        "DevOps & Infra",
        "Web Development",
    ]


def test_search_category_skills(client):
    response = client.get(
        f"/skills/categories/{quote('AI & ML', safe='')}/search",
        params={"q": "databases", "limit": 2},
    )
    assert response.status_code == 200
    data = response.json()
    assert [r["skill"] for r in data] == ["Embeddings & Vector DBs", "Prompt Engineering"]


def test_search_unknown_category(client):
    response = client.get("/skills/categories/Cooking/search", params={"q": "pasta"})
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown category: Cooking"
