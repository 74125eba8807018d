"""LLM service implementation."""

import logging
from typing import Dict, Optional

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from ...application.interfaces import ILLMService
from ...domain.exceptions import LLMServiceError

logger = logging.getLogger(__name__)

SYSTEM_PROMPTS = {
    "integral_questions": (
        "You are an expert in integral theory and developmental psychology. "
        "Ask short, open, non-leading questions."
    ),
    "integral_analysis": (
        "You are an expert in integral theory. Adjust developmental level scores "
        "conservatively, by at most 2 points per level, and reply with JSON only."
    ),
    "trait_questions": (
        "You help clarify personality assessment results with one concise question."
    ),
    "trait_analysis": (
        "You adjust personality trait scores by at most 2 points based on clarifying "
        "answers and reply with JSON only."
    ),
}


class LLMServiceImpl(ILLMService):
    """LLM service using Anthropic or OpenAI, selected by provider name."""

    def __init__(
        self,
        provider: str = "claude",
        anthropic_api_key: Optional[str] = None,
        openai_api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 1024,
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.anthropic_client = AsyncAnthropic(api_key=anthropic_api_key) if anthropic_api_key else None
        self.openai_client = AsyncOpenAI(api_key=openai_api_key) if openai_api_key else None

        if provider == "openai":
            self.model = model or "gpt-4o-mini"
        else:
            self.model = model or "claude-3-5-haiku-latest"

    async def complete(self, prompt: str, purpose: str = "general") -> str:
        system_prompt = SYSTEM_PROMPTS.get(purpose, "")

        try:
            if self.provider == "openai":
                return await self._generate_openai_response(prompt, system_prompt)
            return await self._generate_anthropic_response(prompt, system_prompt)
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error(f"Error generating {purpose} completion: {e}")
            raise LLMServiceError(self.provider, str(e)) from e

    async def health_check(self) -> Dict[str, bool]:
        return {
            "anthropic": self.anthropic_client is not None,
            "openai": self.openai_client is not None,
        }

    async def _generate_openai_response(self, prompt: str, system_prompt: str) -> str:
        if self.openai_client is None:
            raise LLMServiceError("openai", "API key not configured")

        messages = [{"role": "user", "content": prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})

        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""

    async def _generate_anthropic_response(self, prompt: str, system_prompt: str) -> str:
        if self.anthropic_client is None:
            raise LLMServiceError("claude", "API key not configured")

        response = await self.anthropic_client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text
