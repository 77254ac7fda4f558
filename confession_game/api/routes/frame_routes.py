# confession_game/api/routes/frame_routes.py
import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from confession_game.core.dependencies import get_http_client
from confession_game.models.frame_models import FrameActionRequest
from confession_game.services.frame_services import handle_frame_action

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Frame"])


@router.post("/frame")
async def frame_action(request: Request, http_client: httpx.AsyncClient = Depends(get_http_client)):
    """
    Handle a frame button press: look up the prompt in the frame state and
    answer with the frame card plus a redirect to the prompt page.
    """
    try:
        payload = FrameActionRequest.model_validate(await request.json())
        page = await handle_frame_action(http_client, payload.untrustedData.state)
    except Exception as e:
        logger.exception(f"Error in frame handler: {e}")
        return PlainTextResponse("Error processing frame action", status_code=500)

    return HTMLResponse(page)
