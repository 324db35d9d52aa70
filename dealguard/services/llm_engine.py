from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    model_path: str
    max_tokens: int = 512
    temperature: float = 0.7
    top_k: int = 40
    tokenizer_path: str | None = None


class TextGenerationEngine(Protocol):
    def generate(self, prompt: str) -> str: ...

    def close(self) -> None: ...


EngineFactory = Callable[[EngineConfig], TextGenerationEngine]


class TransformersEngine:
    """On-device text generation backed by a local ``transformers`` checkpoint.

    ``generate`` blocks until the model finishes and is not safe to call from
    several threads at once.
    """

    def __init__(self, config: EngineConfig, pipe: Any):
        self._config = config
        self._pipe = pipe

    @classmethod
    def load(cls, config: EngineConfig) -> "TransformersEngine":
        try:
            from transformers import pipeline
        except ImportError as exc:
            raise ValueError(
                "transformers is required for on-device LLM detection. Install the 'llm' extra."
            ) from exc

        pipe = pipeline(
            task="text-generation",
            model=config.model_path,
            tokenizer=config.tokenizer_path or config.model_path,
            device=-1,
        )
        logger.info("Loaded text-generation model from %s", config.model_path)
        return cls(config, pipe)

    def generate(self, prompt: str) -> str:
        if self._pipe is None:
            raise RuntimeError("Engine has been closed.")

        outputs = self._pipe(
            prompt,
            max_new_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            top_k=self._config.top_k,
            do_sample=True,
            return_full_text=False,
        )
        if not outputs:
            return ""
        return str(outputs[0].get("generated_text", "") or "")

    def close(self) -> None:
        self._pipe = None


def create_engine(config: EngineConfig) -> TextGenerationEngine:
    return TransformersEngine.load(config)
