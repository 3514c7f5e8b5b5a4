import logging

from google import genai
from google.genai import types

from fittrack.config import GEMINI_API_KEY, GEMINI_MODEL
from fittrack.errors import EstimationUnavailable

logger = logging.getLogger(__name__)


class GeminiEstimationClient:
    """Single-shot text generation against Gemini.

    Any failure (transport, quota, empty or blocked response) is raised as
    ``EstimationUnavailable``. No retries.
    """

    def __init__(self, api_key=None, model=None, temperature=0.2):
        self.api_key = api_key or GEMINI_API_KEY
        self.model = model or GEMINI_MODEL
        self.temperature = temperature
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise EstimationUnavailable("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    candidate_count=1,
                ),
            )
            text = response.text
        except Exception as e:
            logger.warning("Gemini generation failed (prompt %d chars): %s", len(prompt), e)
            raise EstimationUnavailable(f"Estimation service error: {e}") from e

        if not text or not text.strip():
            # blocked prompts come back with no candidate text
            logger.warning("Gemini returned an empty response (prompt %d chars)", len(prompt))
            raise EstimationUnavailable("Estimation service returned no content")
        return text
