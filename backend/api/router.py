from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import (
    build_gap_engine,
    get_embedding_provider,
    get_skill_search,
    get_skill_taxonomy,
    get_vector_index,
)
from config import settings
from models.requests import SkillGapRequest
from models.responses import HealthResponse, SkillGapReport
from models.schemas.skill_search import CategorySkillResult, SkillSearchResult
from services import gap_report
from services.embeddings import EmbeddingProvider
from services.errors import EmbeddingError, SearchError
from services.skill_search import SkillSearchService
from services.taxonomy import Taxonomy
from services.vector_index import VectorIndex

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _service_error(e: EmbeddingError | SearchError) -> HTTPException:
    status = 502 if isinstance(e, EmbeddingError) else 503
    return HTTPException(status_code=status, detail=f"Skill gap analysis failed at {e.stage} stage")


@router.get("/health", response_model=HealthResponse)
async def health(taxonomy: Taxonomy = Depends(get_skill_taxonomy)):
    return HealthResponse(
        status="ok",
        gemini_configured=bool(settings.gemini_api_key),
        taxonomy_categories=len(taxonomy),
    )


@router.post("/skill-gaps", response_model=SkillGapReport)
@limiter.limit("10/minute")
async def skill_gaps(
    request: Request,
    body: SkillGapRequest,
    embedder: EmbeddingProvider = Depends(get_embedding_provider),
    index: VectorIndex = Depends(get_vector_index),
    taxonomy: Taxonomy = Depends(get_skill_taxonomy),
):
    if not body.user_goal.strip():
        raise HTTPException(status_code=400, detail="Learning goal must not be empty")
    if len(body.user_goal) > settings.max_goal_length:
        raise HTTPException(
            status_code=400,
            detail=f"Learning goal too long (max {settings.max_goal_length} chars)",
        )

    engine = build_gap_engine(body.profile, embedder, index, taxonomy)
    try:
        return await gap_report.build_skill_gap_report(
            engine,
            body.user_goal,
            body.skills,
            user_name=body.user_name,
            include_summary=body.include_summary,
        )
    except (EmbeddingError, SearchError) as e:
        raise _service_error(e) from e


@router.get("/skills/search", response_model=list[SkillSearchResult])
@limiter.limit("30/minute")
async def search_skills(
    request: Request,
    q: str = Query(..., min_length=1, max_length=500),
    limit: int = Query(settings.skill_search_limit, ge=1, le=50),
    search: SkillSearchService = Depends(get_skill_search),
):
    try:
        return await search.search_similar_skills(
            q, limit=limit, score_threshold=settings.skill_search_score_threshold,
        )
    except (EmbeddingError, SearchError) as e:
        raise _service_error(e) from e


@router.get("/skills/categories", response_model=list[str])
async def skill_categories(search: SkillSearchService = Depends(get_skill_search)):
    return search.list_categories()


@router.get("/skills/categories/{category}/search", response_model=list[CategorySkillResult])
@limiter.limit("30/minute")
async def search_category_skills(
    request: Request,
    category: str,
    q: str = Query(..., min_length=1, max_length=500),
    limit: int = Query(5, ge=1, le=50),
    search: SkillSearchService = Depends(get_skill_search),
):
    if search.taxonomy.get(category) is None:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    try:
        return await search.search_skills_in_category(category, q, limit=limit)
    except (EmbeddingError, SearchError) as e:
        raise _service_error(e) from e
