# confession_game/services/frame_services.py
import html
import logging
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from confession_game.core.config import settings
from confession_game.models.frame_models import PromptLookupError, PromptSummary

logger = logging.getLogger(__name__)

FRAME_BUTTON_LABEL = "🤫 Start Confessing"


async def fetch_prompt_summary(http_client: httpx.AsyncClient, prompt_id: str) -> PromptSummary:
    try:
        response = await http_client.get(f"/api/prompts/{quote(prompt_id, safe='')}")
        response.raise_for_status()
        return PromptSummary(**response.json())
    except (httpx.HTTPError, ValueError, TypeError, ValidationError) as e:
        raise PromptLookupError(f"Failed to fetch prompt {prompt_id}: {e}") from e


def build_prompt_url(prompt_id: str) -> str:
    return f"{settings.APP_BASE_URL}/prompts/{prompt_id}"


def build_image_url(prompt: PromptSummary) -> str:
    author = prompt.author.username if prompt.author and prompt.author.username else "anonymous"
    query = urlencode(
        {"author": author, "content": prompt.content, "confessions": prompt.totalConfessions},
        quote_via=quote,
    )
    return f"{settings.APP_BASE_URL}/api/og?{query}"


def render_frame_html(prompt: PromptSummary, state: str) -> str:
    """
    Renders the frame card: Open Graph tags, the fc:frame tags the social client
    reads, and a zero-delay refresh for browsers that open the link directly.
    """
    image_url = html.escape(build_image_url(prompt))
    prompt_url = html.escape(build_prompt_url(state))
    title = html.escape(f"Never Have I Ever: {prompt.content}")
    description = html.escape(f"Join {prompt.totalConfessions} others in confessing")

    return f"""<!DOCTYPE html>
<html>
  <head>
    <title>{title}</title>
    <meta property="og:title" content="{title}" />
    <meta property="og:description" content="{description}" />
    <meta property="og:image" content="{image_url}" />
    <meta property="fc:frame" content="vNext" />
    <meta property="fc:frame:post_url" content="{prompt_url}" />
    <meta property="fc:frame:image" content="{image_url}" />
    <meta property="fc:frame:button:1" content="{FRAME_BUTTON_LABEL}" />
    <meta property="fc:frame:state" content="{html.escape(state)}" />
    <meta http-equiv="refresh" content="0;url={prompt_url}" />
  </head>
  <body>
    <p>Redirecting to prompt...</p>
  </body>
</html>
"""


async def handle_frame_action(http_client: httpx.AsyncClient, state: str) -> str:
    logger.info(f"Frame action for prompt {state}")
    prompt = await fetch_prompt_summary(http_client, state)
    return render_frame_html(prompt, state)
