"""
LLM Summarizer - text optimizer backed by LiteLLM.

Summarize modes call a model through LiteLLM with transient-failure retries.
Any other failure falls back to the local DefaultTextOptimizer, so a
missing API key degrades to the stub summary instead of failing the call.
"""

import litellm
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..core.config import BrevitConfig
from ..exceptions import SummarizationError
from ..models.enums import TextOptimizationMode
from ..utils.logging import get_logger
from .base import TextOptimizer
from .text_optimizer import DefaultTextOptimizer

logger = get_logger(__name__)

SUMMARY_PROMPT = (
    "Summarize the following text for use as context in another prompt. "
    "Keep names, numbers and decisions. Reply with the summary only.\n\n{text}"
)

RETRYABLE_ERRORS = (
    TimeoutError,
    ConnectionError,
    litellm.Timeout,
    litellm.APIConnectionError,
    litellm.RateLimitError,
)


class LiteLLMTextOptimizer:
    """
    Summarizes long text with a LiteLLM model.

    Example:
        client = BrevitClient(config, text_optimizer=LiteLLMTextOptimizer())
        summary = await client.optimize(long_report)
    """

    def __init__(
        self,
        fallback: TextOptimizer | None = None,
        max_retries: int = 3,
        backoff: float = 1.0,
        timeout: int = 60,
        temperature: float = 0.3,
    ):
        """
        Initialize the summarizer.

        Args:
            fallback: Optimizer used for clean/none modes and on failure
            max_retries: Attempts per summary on transient failures
            backoff: Exponential backoff multiplier in seconds (0 disables waiting)
            timeout: Request timeout in seconds
            temperature: Sampling temperature
        """
        self.fallback = fallback or DefaultTextOptimizer()
        self.max_retries = max_retries
        self.backoff = backoff
        self.timeout = timeout
        self.temperature = temperature

    async def optimize_text(self, text: str, config: BrevitConfig) -> str:
        if config.text_mode not in (
            TextOptimizationMode.SUMMARIZE_FAST,
            TextOptimizationMode.SUMMARIZE_HIGH_QUALITY,
        ):
            return await self.fallback.optimize_text(text, config)

        model = (
            config.summarizer_fast_model
            if config.text_mode == TextOptimizationMode.SUMMARIZE_FAST
            else config.summarizer_quality_model
        )

        try:
            return await self.summarize(text, model, config.summarizer_max_tokens)
        except SummarizationError as e:
            logger.warning("summarization_failed", **e.to_dict())
            return await self.fallback.optimize_text(text, config)

    async def summarize(self, text: str, model: str, max_tokens: int) -> str:
        """
        Summarize text with one model.

        Raises:
            SummarizationError: If every attempt fails or the reply is empty
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.backoff, max=10),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await litellm.acompletion(
                        model=model,
                        messages=[
                            {"role": "user", "content": SUMMARY_PROMPT.format(text=text)}
                        ],
                        max_tokens=max_tokens,
                        temperature=self.temperature,
                        timeout=self.timeout,
                    )
        except Exception as e:
            raise SummarizationError(
                f"LLM summarization failed: {e}",
                model=model,
                details={"error_type": type(e).__name__},
            ) from e

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise SummarizationError("LLM returned an empty summary", model=model)

        logger.debug("text_summarized", model=model, input_chars=len(text), output_chars=len(content))
        return content.strip()
