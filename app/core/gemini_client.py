
from google import genai
from google.genai import types

from app.core.exceptions import ConfigurationError, KnowledgeServiceError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class GeminiClient:
    """Wrapper for Google Gemini API client.

    Used as the knowledge service: a natural-language question goes in and
    the raw text of the answer comes back. Parsing is left to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        search_grounding: bool = True,
        timeout: int = 90,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name to use
            search_grounding: Attach the Google Search tool so answers use live data
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not configured")

        self.api_key = api_key
        self.model = model
        self.search_grounding = search_grounding
        self.timeout = timeout

        try:
            self.client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout * 1000),
            )
            LOGGER.info(f"Initialized Gemini client with model {self.model}")
        except Exception as e:
            LOGGER.error(f"Failed to initialize Gemini client: {e}")
            raise ConfigurationError(f"Failed to initialize Gemini client: {e}", original_error=e)

    def _build_config(self) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(temperature=0.0)

        if self.search_grounding:
            config.tools = [types.Tool(google_search=types.GoogleSearch())]

        return config

    async def ask(self, prompt: str) -> str:
        """Ask a single natural-language question.

        Args:
            prompt: Fully constructed prompt

        Returns:
            Generated text response ("" when the model returned nothing)

        Raises:
            KnowledgeServiceError: If generation fails
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._build_config(),
            )
        except Exception as e:
            LOGGER.error(f"Gemini generation failed: {e}", exc_info=True)
            raise KnowledgeServiceError(f"Gemini generation failed: {e}", original_error=e) from e

        if not response.text:
            LOGGER.warning("Empty response from Gemini")
            return ""

        return response.text
