from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..config import Settings, settings as default_settings
from ..models.scam_analysis import DetectionMethod, ScamAnalysis, ScamType
from .llm_scam_detector import LLMScamDetector
from .rule_detector import RuleBasedDetector, warning_for

logger = logging.getLogger(__name__)


def _merge_unique(*groups: list[str]) -> list[str]:
    seen: set[str] = set()
    merged: list[str] = []
    for group in groups:
        for item in group:
            if item not in seen:
                seen.add(item)
                merged.append(item)
    return merged


# ---------------------------------------------------------------------------
# Hybrid detection
# ---------------------------------------------------------------------------

class HybridScamDetector:
    """Rule-based keyword matching, refined by the on-device LLM when it is loaded."""

    def __init__(
        self,
        rule_detector: RuleBasedDetector,
        llm_detector: LLMScamDetector,
        settings: Settings | None = None,
    ):
        self._settings = settings or default_settings
        self.rule_detector = rule_detector
        self.llm_detector = llm_detector

    async def initialize_llm(self) -> bool:
        return await self.llm_detector.initialize()

    def is_llm_available(self) -> bool:
        return self.llm_detector.is_available()

    async def analyze(self, text: str) -> ScamAnalysis:
        rule_result = self.rule_detector.analyze(text)

        if rule_result.confidence >= self._settings.rule_confident_threshold:
            return rule_result

        if not self.llm_detector.is_available():
            return rule_result

        llm_result = await self.llm_detector.analyze(text)
        if llm_result is None:
            logger.info("LLM analysis unavailable for this message; using rule-based result.")
            return rule_result

        return self._combine(rule_result, llm_result)

    def _combine(self, rule_result: ScamAnalysis, llm_result: ScamAnalysis) -> ScamAnalysis:
        weight = self._settings.hybrid_rule_weight
        confidence = weight * rule_result.confidence + (1 - weight) * llm_result.confidence
        confidence = max(0.0, min(1.0, confidence))
        is_scam = llm_result.is_scam or confidence >= self._settings.rule_scam_threshold

        scam_type = llm_result.scam_type
        if scam_type in (ScamType.UNKNOWN, ScamType.SAFE) and rule_result.scam_type not in (
            ScamType.UNKNOWN,
            ScamType.SAFE,
        ):
            scam_type = rule_result.scam_type
        if is_scam and scam_type is ScamType.SAFE:
            scam_type = ScamType.UNKNOWN

        warning_message = llm_result.warning_message or rule_result.warning_message
        if is_scam and not warning_message:
            warning_message = warning_for(scam_type)

        return ScamAnalysis(
            is_scam=is_scam,
            confidence=confidence,
            reasons=_merge_unique(llm_result.reasons, rule_result.reasons),
            detected_keywords=rule_result.detected_keywords,
            detection_method=DetectionMethod.HYBRID,
            scam_type=scam_type,
            warning_message=warning_message if is_scam else "",
            suspicious_parts=_merge_unique(llm_result.suspicious_parts, rule_result.suspicious_parts),
        )

    def close(self) -> None:
        self.llm_detector.close()


# ---------------------------------------------------------------------------
# Background initialization
# ---------------------------------------------------------------------------

class BackgroundInitializer:
    """One-shot background warm-up of the LLM with an observable outcome."""

    def __init__(self, detector: HybridScamDetector):
        self._detector = detector
        self._task: Optional[asyncio.Task[bool]] = None

    async def _run(self) -> bool:
        logger.info("Starting LLM initialization...")
        try:
            success = await self._detector.initialize_llm()
        except Exception as exc:
            logger.error("Error during LLM initialization: %s", exc, exc_info=True)
            return False

        if success:
            logger.info("LLM initialized successfully")
        else:
            logger.warning("LLM initialization failed - will use rule-based detection only")
        return success

    def start(self) -> asyncio.Task[bool]:
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self._task

    @property
    def started(self) -> bool:
        return self._task is not None

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    @property
    def result(self) -> Optional[bool]:
        if not self.done or self._task.cancelled():
            return None
        return self._task.result()

    async def wait(self) -> bool:
        if self._task is None:
            raise RuntimeError("Background initialization has not been started.")
        return await self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
