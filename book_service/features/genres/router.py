"""API router for the genres feature.

Endpoints:
    GET /genres - List all genres ordered by name
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from book_service.core.dependencies.auth import CurrentUser
from book_service.core.dependencies.database import get_db_session
from book_service.core.schemas import APIResponse
from book_service.features.genres.schemas import GenreResponse
from book_service.features.genres.service import GenreService

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get(
    "",
    response_model=APIResponse[list[GenreResponse]],
    summary="List genres",
    description="Return every genre, ordered alphabetically by name.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def list_genres(
    _user: CurrentUser,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> APIResponse[list[GenreResponse]]:
    genres = await GenreService(session).list_genres()
    return APIResponse(data=[GenreResponse.model_validate(genre) for genre in genres])
