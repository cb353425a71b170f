"""
Regulations Routes
==================

API endpoints for regulation details and search.

Version: 0.1.0
"""

from fastapi import APIRouter, Depends, Query, Request

from services.regulations.details import DetailsFetcher
from services.regulations.search import SearchOrchestrator
from shared.models.regulation import DocumentDetails, SearchCriteria, SearchResult


router = APIRouter()


def get_details_fetcher(request: Request) -> DetailsFetcher:
    return request.app.state.details_fetcher


def get_search_orchestrator(request: Request) -> SearchOrchestrator:
    return request.app.state.search_orchestrator


@router.get("", response_model=SearchResult)
async def search_regulations(
    naics: str | None = Query(default=None, description="NAICS industry code"),
    zip: str | None = Query(default=None),
    state: str | None = Query(default=None),
    state_abbr: str | None = Query(default=None, alias="stateAbbr"),
    city: str | None = Query(default=None),
    street: str | None = Query(default=None),
    substance: str | None = Query(default=None, description="Substance keyword"),
    program: str | None = Query(default=None, description="EPA program name"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=1000),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
) -> SearchResult:
    """
    Search EPA proposed and final rules.

    Paging parameters and keywords are forwarded to the upstream
    documents API; `total` is the upstream count.
    """
    criteria = SearchCriteria(
        naics=naics,
        zip=zip,
        state=state,
        state_abbr=state_abbr,
        city=city,
        street=street,
        substance=substance,
        program=program,
        offset=offset,
        limit=limit,
    )
    return await orchestrator.search(criteria)


@router.get("/{document_id}", response_model=DocumentDetails)
async def get_regulation_details(
    document_id: str,
    zip: str | None = Query(default=None, description="Facility zip code"),
    state_abbr: str | None = Query(default=None, alias="stateAbbr"),
    city: str | None = Query(default=None),
    street: str | None = Query(default=None),
    program: str | None = Query(default=None, description="Facility program name"),
    fetcher: DetailsFetcher = Depends(get_details_fetcher),
) -> DocumentDetails:
    """
    Get a regulatory document with its programs, regulations, narrative
    sections and, when a location is given, nearby facilities.
    """
    return await fetcher.get_details(
        document_id,
        zip=zip,
        state_abbr=state_abbr,
        city=city,
        street=street,
        program=program,
    )
