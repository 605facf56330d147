"""
OpenAI Service - Embedding generation using the OpenAI / Azure OpenAI API.
"""
from typing import Any, Dict, List, Optional
import logging

import openai
from openai import AzureOpenAI, OpenAI
from tenacity import (
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    Retrying,
    stop_after_attempt,
    wait_exponential,
)

from core.config_loader import EmbeddingConfig
from core.exceptions import MalformedInputError, ProviderUnavailableError
from core.llm.interfaces import EmbeddingProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

RETRYABLE_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Embedding rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient embedding API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _embedding_retry(max_attempts: int, **kwargs) -> Retrying:
    """Return a tenacity Retrying controller for embedding calls."""
    return Retrying(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=wait_exponential(multiplier=1, min=1, max=20),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


class OpenAIEmbeddingService(EmbeddingProvider):
    """
    OpenAI Embedding Service.

    Uses AzureOpenAI when an Azure endpoint is configured, otherwise the
    plain OpenAI client (optionally pointed at a compatible base_url).
    SDK-level retries are disabled; transient errors are retried here and
    every final failure surfaces as ProviderUnavailableError.
    """

    def __init__(
        self,
        config: Optional[EmbeddingConfig] = None,
        client: Optional[Any] = None,
        retry_kwargs: Optional[Dict[str, Any]] = None
    ):
        self.config = config or EmbeddingConfig()
        self.client = client if client is not None else self._build_client(self.config)
        self._retry_kwargs = retry_kwargs or {}

    @staticmethod
    def _build_client(config: EmbeddingConfig):
        if config.azure_endpoint:
            return AzureOpenAI(
                azure_endpoint=config.azure_endpoint,
                api_key=config.api_key,
                api_version=config.api_version,
                timeout=config.timeout_seconds,
                max_retries=0,
            )

        client_kwargs: Dict[str, Any] = {
            'timeout': config.timeout_seconds,
            'max_retries': 0,
        }
        if config.api_key:
            client_kwargs['api_key'] = config.api_key
        if config.base_url:
            client_kwargs['base_url'] = config.base_url
        return OpenAI(**client_kwargs)

    @property
    def model_name(self) -> str:
        return self.config.model

    def _create_embedding(self, text: str) -> List[float]:
        request: Dict[str, Any] = {'input': text, 'model': self.config.model}
        if self.config.dimensions:
            request['dimensions'] = self.config.dimensions
        response = self.client.embeddings.create(**request)
        return list(response.data[0].embedding)

    def generate_embedding(self, text: str) -> List[float]:
        """Generate embedding vector for text."""
        if not text or not text.strip():
            raise MalformedInputError("Cannot embed empty text")

        try:
            for attempt in _embedding_retry(self.config.max_attempts, **self._retry_kwargs):
                with attempt:
                    return self._create_embedding(text)
        except (openai.OpenAIError, RetryError) as e:
            logger.warning(f"Embedding request failed with model {self.config.model}: {e}")
            raise ProviderUnavailableError(f"Embedding provider unavailable: {e}") from e
