"""
Abstract base client for text generation.

Defines the interface the study assistant depends on. Implementations own
their transport and retry behaviour; callers only ever see a CallResult.
"""

from abc import ABC, abstractmethod
from typing import Optional
import structlog

from lesson_assistant.models.llm_models import RequestSpec
from lesson_assistant.models.results import CallResult
from lesson_assistant.retry.cancellation import CancelToken


logger = structlog.get_logger(__name__)


class BaseTextGenerationClient(ABC):
    """
    Abstract base class for text-generation clients.

    Responsibilities:
    - Send one logical request to the generation service
    - Recover from transient failures internally
    - Report the final outcome as a tagged CallResult (never raise for
      service or network failures)

    Does NOT handle:
    - Prompt composition (that's PromptBuilder's job)
    - User-facing messages (that's StudyAssistant's job)
    """

    def __init__(self, base_url: str, timeout: float = 30.0, **kwargs):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the generation API
            timeout: Per-attempt timeout in seconds
            **kwargs: Additional provider-specific config
        """
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

    @abstractmethod
    async def execute(
        self,
        spec: RequestSpec,
        cancel_token: Optional[CancelToken] = None,
    ) -> CallResult:
        """
        Run one logical call to completion.

        Args:
            spec: Payload and target endpoint
            cancel_token: Optional token; setting it makes the call return Cancelled

        Returns:
            Success, EmptySuccess, Failure or Cancelled
        """
        pass

    async def close(self):
        """
        Close client connections and cleanup resources.

        Default implementation does nothing.
        """
        logger.debug("Closing text generation client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
