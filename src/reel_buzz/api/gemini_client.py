"""Google Gemini API client with model fallback."""

import logging

from google import genai
from google.genai import errors, types

from reel_buzz.config.settings import get_settings
from reel_buzz.errors import AIClientError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for single-prompt text generation with Gemini."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        fallback_model: str | None = None,
    ):
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key. Defaults to settings.
            model: Primary model. Defaults to settings.
            fallback_model: Model tried when the primary fails. Defaults to settings.
        """
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.fallback_model = fallback_model or settings.gemini_fallback_model
        self._client: genai.Client | None = None  # Lazy-loaded

    @property
    def client(self) -> genai.Client:
        """Lazy-load the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def models_to_try(self, model: str | None = None) -> list[str]:
        """Return the ordered list of models for a call.

        An explicit model disables the fallback.
        """
        if model:
            return [model]
        if self.fallback_model and self.fallback_model != self.model:
            return [self.model, self.fallback_model]
        return [self.model]

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        model: str | None = None,
    ) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The prompt to send.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in the response.
            model: Explicit model to use instead of primary/fallback.

        Returns:
            The response text.

        Raises:
            AIClientError: If no key is configured or every model failed.
        """
        if not self.api_key:
            raise AIClientError(
                "GOOGLE_AI_API_KEY or GEMINI_API_KEY environment variable is not set"
            )

        models = self.models_to_try(model)
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
        )
        last_error: Exception | None = None

        for index, model_name in enumerate(models):
            try:
                response = await self.client.aio.models.generate_content(
                    model=model_name,
                    contents=prompt,
                    config=config,
                )
                text = self.get_text_response(response)
                logger.info(f"Gemini call succeeded with model {model_name}")
                return text
            except Exception as e:
                last_error = e
                if isinstance(e, errors.APIError) and e.code == 429:
                    logger.warning(f"Model {model_name} rate limited")
                if index < len(models) - 1:
                    logger.warning(f"Model {model_name} failed ({e}), trying fallback")
                    continue

        raise AIClientError(f"Failed to call Gemini API: {last_error or 'Unknown error'}")

    def get_text_response(self, response: types.GenerateContentResponse) -> str:
        """Extract text from Gemini's response.

        Args:
            response: Gemini's response.

        Returns:
            Concatenated text of the first candidate.

        Raises:
            AIClientError: If the response has no candidates or no text.
        """
        if not response.candidates:
            raise AIClientError("No response candidates from Gemini")

        content = response.candidates[0].content
        text_parts: list[str] = []
        if content and content.parts:
            for part in content.parts:
                if part.text:
                    text_parts.append(part.text)

        if not text_parts:
            raise AIClientError("No text content in Gemini response")
        return "".join(text_parts)
