import logging
import requests
from agroscan.core.config import PERPLEXITY_API_KEY, PERPLEXITY_API_URL, HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    pass


def call_perplexity(prompt: str, max_tokens: int = 100, url: str = PERPLEXITY_API_URL) -> str:
    """
    Send one prompt to the Perplexity completion endpoint and return its answer.

    A single attempt is made, bounded by HTTP_TIMEOUT. Any failure raises;
    callers decide what to show the user.
    """
    if not PERPLEXITY_API_KEY:
        raise CompletionError("PERPLEXITY_API_KEY environment variable not set")

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {PERPLEXITY_API_KEY}"
    }

    payload = {
        "prompt": prompt,
        "max_tokens": max_tokens,
    }

    response = requests.post(url, headers=headers, json=payload, timeout=HTTP_TIMEOUT)

    try:
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        raise CompletionError(f"Perplexity returned HTTP {response.status_code}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise CompletionError("Perplexity response is not valid JSON") from e

    answer = data.get("answer") if isinstance(data, dict) else None
    if not isinstance(answer, str) or not answer.strip():
        raise CompletionError("No answer in Perplexity response")

    logger.debug(f"Perplexity answered with {len(answer)} characters")
    return answer
