from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.schemas.common import APIResponse
from app.schemas.gacha import DrawRequest, DrawResponse
from app.services.gacha import GachaService

router = APIRouter(prefix="/gacha", tags=["gacha"])


@router.post("/{username}/draw")
async def draw_cards(
    username: Annotated[str, Path(min_length=1, max_length=100)],
    request: DrawRequest,
    service: Annotated[GachaService, Depends()],
) -> APIResponse[DrawResponse]:
    result = await service.draw(username, request.count)
    return APIResponse(data=result, message=f"Drew {len(result.cards)} card(s)")
