"""
Station Sim — Narrative Client
HTTP client for the text-generation service that writes hazard alerts and
crew chatter.

Endpoint:
- POST /v1beta/models/{model}:generateContent
"""

from typing import Dict, Optional
import json
import logging

from urllib.request import Request, urlopen
from urllib.error import HTTPError, URLError

from ..config import NARRATIVE, NarrativeConfig

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class NarrativeError(Exception):
    """Narrative generation failed (network, HTTP, or malformed reply)."""
    pass


class QuotaExceededError(NarrativeError):
    """The service rejected the request with a rate limit (HTTP 429)."""
    pass


# =============================================================================
# PROMPTS
# =============================================================================

EVENT_PROMPT = """You are the AI computer of a futuristic space station.
Generate a short, urgent, sci-fi alert title and a 1-sentence description for a random event.
Event Type: {kind}
Context: {context}

Format: JSON
{{ "title": "...", "description": "..." }}"""

CHATTER_PROMPT = "Generate a very short (max 10 words) bark/chatter from a space station {role}. Tone: {tone}."


# =============================================================================
# NARRATIVE CLIENT
# =============================================================================

class NarrativeClient:
    """
    Blocking client for the narrative service.

    Every call is a single attempt. Callers decide what to do on failure.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = NARRATIVE.base_url,
        model: str = NARRATIVE.model,
        timeout: float = NARRATIVE.timeout_s,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: NarrativeConfig = NARRATIVE) -> "NarrativeClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            model=config.model,
            timeout=config.timeout_s,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def _make_request(self, prompt: str, response_mime_type: Optional[str] = None) -> str:
        """
        Send a prompt and return the generated text.

        Raises:
            QuotaExceededError: on HTTP 429
            NarrativeError: on any other failure or an empty reply
        """
        payload: Dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_mime_type:
            payload["generationConfig"] = {"responseMimeType": response_mime_type}

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-goog-api-key": self.api_key,
        }
        body = json.dumps(payload).encode("utf-8")

        try:
            request = Request(self.endpoint, data=body, headers=headers, method="POST")
            with urlopen(request, timeout=self.timeout) as response:
                response_data = response.read().decode("utf-8")

        except HTTPError as e:
            if e.code == 429:
                raise QuotaExceededError(f"Narrative quota exceeded: {e.reason}")
            raise NarrativeError(f"Narrative request failed: {e.code} {e.reason}")

        except URLError as e:
            raise NarrativeError(f"Cannot reach narrative service: {e.reason}")

        except TimeoutError as e:
            raise NarrativeError(f"Narrative request timed out: {e}")

        except Exception as e:
            logger.error(f"Narrative request error: {e}")
            raise NarrativeError(f"Narrative request failed: {e}")

        return self._extract_text(response_data)

    @staticmethod
    def _extract_text(response_data: str) -> str:
        try:
            data = json.loads(response_data)
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise NarrativeError(f"Malformed narrative response: {e}")

        if not text or not text.strip():
            raise NarrativeError("No response text")
        return text.strip()

    def generate_event_narrative(self, kind: str, context: str) -> Dict[str, str]:
        """
        Title and description for a hazard.

        Returns:
            {"title": ..., "description": ...}
        """
        text = self._make_request(EVENT_PROMPT.format(kind=kind, context=context), "application/json")
        try:
            data = json.loads(text)
        except ValueError as e:
            raise NarrativeError(f"Narrative reply is not JSON: {e}")

        if not isinstance(data, dict) or not data.get("title") or not data.get("description"):
            raise NarrativeError("Narrative reply missing title or description")
        return {"title": str(data["title"]), "description": str(data["description"])}

    def generate_crew_chatter(self, role: str, tone: str) -> str:
        return self._make_request(CHATTER_PROMPT.format(role=role, tone=tone))
