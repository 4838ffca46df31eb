from abc import ABC, abstractmethod

from openai import OpenAI

import config


class TextGenerator(ABC):
    """Stateless prompt-in, text-out completion backend."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the model's completion for *prompt*."""


class OpenAIGenerator(TextGenerator):
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        temperature: float = 0.3,
    ):
        # Local OpenAI-compatible servers ignore the key but the SDK requires one
        self.client = OpenAI(
            api_key=api_key or config.OPENAI_API_KEY or "not-needed",
            base_url=base_url or config.LLM_BASE_URL or None,
            timeout=timeout or config.LLM_TIMEOUT,
        )
        self.model = model or config.LLM_MODEL
        self.temperature = temperature

    def generate(self, prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )
        return response.choices[0].message.content or ""


def build_generator() -> TextGenerator | None:
    """Return the configured generator, or None when no model endpoint is set up."""
    if not config.has_llm():
        return None
    return OpenAIGenerator()
