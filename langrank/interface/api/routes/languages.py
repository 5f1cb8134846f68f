"""Language catalogue routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from langrank.application.usecase.language import (
    GetLanguageStatsRequest,
    GetLanguageStatsResponse,
    GetLanguageStatsUseCase,
    ListLanguagesResponse,
    ListLanguagesUseCase,
)

router = APIRouter(prefix="/languages", tags=["languages"], route_class=DishkaRoute)


@router.get("", response_model=ListLanguagesResponse)
async def list_languages(
    list_languages_use_case: FromDishka[ListLanguagesUseCase],
) -> ListLanguagesResponse:
    """List every language, highest lifetime points first.

    The first languages form the headline section (top), the rest are
    returned under additional.
    """
    return await list_languages_use_case.execute()


@router.get("/{language_id}", response_model=GetLanguageStatsResponse)
async def get_language(
    language_id: str,
    get_language_stats_use_case: FromDishka[GetLanguageStatsUseCase],
) -> GetLanguageStatsResponse:
    """Get one language with its lifetime total.

    Raises:
        NotFoundError: If the language does not exist (mapped to 404)
    """
    return await get_language_stats_use_case.execute(
        GetLanguageStatsRequest(language_id=language_id)
    )
