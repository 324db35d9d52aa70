from __future__ import annotations

import asyncio
import logging
import shutil
from enum import Enum
from pathlib import Path

from ..config import Settings, settings as default_settings
from ..models.scam_analysis import ScamAnalysis
from .llm_engine import EngineConfig, EngineFactory, TextGenerationEngine, create_engine
from .response_parser import parse_response
from .scam_prompt import build_prompt

logger = logging.getLogger(__name__)


def _remove_path(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    elif path.exists():
        path.unlink()


def _release_abandoned_engine(load: asyncio.Future) -> None:
    if load.cancelled() or load.exception() is not None:
        return
    engine = load.result()
    if engine is not None:
        logger.info("Releasing LLM engine loaded after initialization was cancelled")
        try:
            engine.close()
        except Exception as exc:
            logger.warning("Error while releasing LLM engine: %s", exc)


class DetectorState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    READY = "READY"
    CLOSED = "CLOSED"


class LLMScamDetector:
    """Scam classification with an on-device language model.

    The model is looked up under ``model_data_dir`` and copied there from the
    read-only ``model_asset_dir`` on first use. Every failure is logged and
    reported as ``False`` / ``None`` so callers can fall back to rule-based
    detection.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine_factory: EngineFactory = create_engine,
    ):
        self._settings = settings or default_settings
        self._engine_factory = engine_factory
        self._engine: TextGenerationEngine | None = None
        self._state = DetectorState.UNINITIALIZED
        self._init_lock = asyncio.Lock()
        self._generate_lock = asyncio.Lock()

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def model_file(self) -> Path:
        return Path(self._settings.model_data_dir) / self._settings.model_path

    def _engine_config(self, model_file: Path) -> EngineConfig:
        return EngineConfig(
            model_path=str(model_file.resolve()),
            max_tokens=self._settings.llm_max_tokens,
            temperature=self._settings.llm_temperature,
            top_k=self._settings.llm_top_k,
            tokenizer_path=self._settings.tokenizer_path,
        )

    def _ensure_model_file(self) -> bool:
        model_file = self.model_file
        if model_file.exists():
            return True

        asset = Path(self._settings.model_asset_dir) / self._settings.model_path
        if not asset.exists():
            logger.warning("Model file not found in assets: %s", asset)
            logger.warning(
                "LLM detection will be disabled. Add the model under %s.",
                Path(self._settings.model_asset_dir) / "models",
            )
            return False

        model_file.parent.mkdir(parents=True, exist_ok=True)
        partial = model_file.with_name(model_file.name + ".partial")
        _remove_path(partial)
        if asset.is_dir():
            shutil.copytree(asset, partial)
        else:
            shutil.copyfile(asset, partial)
        partial.replace(model_file)
        logger.info("Model copied from assets to: %s", model_file.resolve())
        return True

    def _load_sync(self) -> TextGenerationEngine | None:
        if not self._ensure_model_file():
            return None
        return self._engine_factory(self._engine_config(self.model_file))

    async def initialize(self) -> bool:
        """Load the model once; later calls return True without side effects."""
        async with self._init_lock:
            if self.is_available():
                return True

            load = asyncio.ensure_future(asyncio.to_thread(self._load_sync))
            try:
                engine = await asyncio.shield(load)
            except asyncio.CancelledError:
                # The worker thread keeps running; release whatever it builds.
                load.add_done_callback(_release_abandoned_engine)
                raise
            except Exception as exc:
                logger.error("Failed to initialize LLM: %s", exc, exc_info=True)
                return False

            if engine is None:
                return False

            self._engine = engine
            self._state = DetectorState.READY
            logger.info("LLM initialized successfully")
            return True

    def is_available(self) -> bool:
        return self._state is DetectorState.READY and self._engine is not None

    async def analyze(self, text: str) -> ScamAnalysis | None:
        if not self.is_available():
            logger.warning("LLM not available, skipping analysis")
            return None

        async with self._generate_lock:
            engine = self._engine
            if engine is None:
                return None

            try:
                prompt = build_prompt(text)
                response = await asyncio.to_thread(engine.generate, prompt)
            except Exception as exc:
                logger.error("Error during LLM analysis: %s", exc, exc_info=True)
                return None

        if response is None or not response.strip():
            logger.warning("Empty response from LLM")
            return None

        return parse_response(response)

    def close(self) -> None:
        engine, self._engine = self._engine, None
        if engine is not None:
            try:
                engine.close()
            except Exception as exc:
                logger.warning("Error while releasing LLM engine: %s", exc)
        self._state = DetectorState.CLOSED
