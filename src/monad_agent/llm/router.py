"""Maps a configured provider name to a ready provider instance."""

from __future__ import annotations

import importlib
import logging

from monad_agent.config import LLMConfig, LLMProviderConfig
from monad_agent.llm.base import BaseLLMProvider

logger = logging.getLogger("monad_agent.llm.router")

# Imported lazily so that only the SDK actually configured gets loaded.
_PROVIDER_CLASSES: dict[str, str] = {
    "openai": "monad_agent.llm.openai.OpenAIProvider",
    "anthropic": "monad_agent.llm.anthropic.AnthropicProvider",
}


def _import_provider_class(dotted_path: str) -> type[BaseLLMProvider]:
    module_path, class_name = dotted_path.rsplit(".", 1)
    cls = getattr(importlib.import_module(module_path), class_name)
    if not (isinstance(cls, type) and issubclass(cls, BaseLLMProvider)):
        raise TypeError(f"Expected a BaseLLMProvider subclass at '{dotted_path}', got {cls!r}")
    return cls


class LLMRouter:
    """Creates providers on first use and caches them per name.

    Parameters
    ----------
    llm_config:
        The ``llm`` section of the application configuration.
    """

    def __init__(self, llm_config: LLMConfig):
        self._config = llm_config
        self._providers: dict[str, BaseLLMProvider] = {}

    def _provider_config(self, name: str) -> LLMProviderConfig:
        block = getattr(self._config, name, None)
        if block is None:
            raise ValueError(
                f"Provider '{name}' is not configured. "
                f"Add an '{name}' section to the llm configuration."
            )
        return block

    def get_provider(self, provider_name: str | None = None) -> BaseLLMProvider:
        """Return the provider for *provider_name* (default: ``default_provider``).

        Raises
        ------
        ValueError
            If the provider is unknown, not configured, or has no API key.
        """
        name = provider_name or self._config.default_provider
        if name in self._providers:
            return self._providers[name]
        if name not in _PROVIDER_CLASSES:
            raise ValueError(
                f"Unknown provider '{name}'. Supported providers: {sorted(_PROVIDER_CLASSES)}"
            )

        block = self._provider_config(name)
        if not block.api_key:
            raise ValueError(
                f"API key for provider '{name}' is empty. Set it in the configuration "
                f"file or via the environment (e.g. ${{{name.upper()}_API_KEY}})."
            )
        if not block.model:
            raise ValueError(f"No model specified for provider '{name}'.")

        provider_cls = _import_provider_class(_PROVIDER_CLASSES[name])
        provider = provider_cls(
            api_key=block.api_key,
            model=block.model,
            base_url=block.base_url,
            max_tokens=block.max_tokens,
            temperature=block.temperature,
            timeout=block.timeout_seconds,
        )
        self._providers[name] = provider
        logger.info("Created %s provider (model=%s)", name, block.model)
        return provider
