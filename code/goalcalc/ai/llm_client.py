import logging
import os
from typing import Any, Dict, Optional

import requests
from openai import OpenAI

logger = logging.getLogger(__name__)

# Any OpenAI-compatible chat endpoint works; Gemini's is the default.
LLM_BASE_URL = os.getenv("GOALCALC_LLM_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai").rstrip("/")
LLM_MODEL = os.getenv("GOALCALC_LLM_MODEL", "gemini-2.5-flash")
LLM_TIMEOUT = float(os.getenv("GOALCALC_LLM_TIMEOUT", "25"))
LLM_HEALTH_TIMEOUT = float(os.getenv("GOALCALC_LLM_HEALTH_TIMEOUT", "1.0"))
LLM_MAX_RETRIES = max(0, int(os.getenv("GOALCALC_LLM_MAX_RETRIES", "0")))
LLM_API_KEY = os.getenv("GOALCALC_LLM_API_KEY") or os.getenv("GEMINI_API_KEY") or os.getenv("OPENAI_API_KEY")


def check_llm_online(timeout: Optional[float] = None) -> bool:
    """True when the model listing answers with anything but a server error."""
    headers = {"Authorization": f"Bearer {LLM_API_KEY}"} if LLM_API_KEY else {}
    try:
        resp = requests.get(
            f"{LLM_BASE_URL}/models",
            timeout=LLM_HEALTH_TIMEOUT if timeout is None else timeout,
            headers=headers,
        )
    except requests.RequestException:
        logger.debug("LLM endpoint %s unreachable", LLM_BASE_URL)
        return False
    return resp.status_code < 500


def query_llm(prompt: str) -> Dict[str, Any]:
    """Send the commentary prompt as a single user turn and return the raw completion."""
    if not LLM_API_KEY:
        raise RuntimeError("Missing GOALCALC_LLM_API_KEY. Set the environment variable and restart the app.")

    client = OpenAI(base_url=LLM_BASE_URL, api_key=LLM_API_KEY, max_retries=LLM_MAX_RETRIES)
    logger.info("Requesting commentary from %s (model=%s)", LLM_BASE_URL, LLM_MODEL)
    response = client.chat.completions.create(
        model=LLM_MODEL,
        messages=[{"role": "user", "content": prompt}],
        timeout=LLM_TIMEOUT,
    )
    return response.model_dump()


def extract_text(response: Dict[str, Any]) -> str:
    choices = response.get("choices") or []
    if not choices:
        return ""
    content = (choices[0].get("message") or {}).get("content")
    return content.strip() if isinstance(content, str) else ""
