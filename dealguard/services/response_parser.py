import logging
from typing import Optional

from pydantic import ValidationError

from ..models.scam_analysis import DetectionMethod, LLMResponse, ScamAnalysis, ScamType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scam type mapping
# ---------------------------------------------------------------------------

# Evaluated top to bottom, first match wins: "정상이지만 투자사기" is INVESTMENT.
SCAM_TYPE_RULES: tuple[tuple[tuple[str, ...], ScamType], ...] = (
    (("투자",), ScamType.INVESTMENT),
    (("중고", "거래"), ScamType.USED_TRADE),
    (("피싱",), ScamType.PHISHING),
    (("사칭",), ScamType.IMPERSONATION),
    (("로맨스",), ScamType.ROMANCE),
    (("대출",), ScamType.LOAN),
    (("정상",), ScamType.SAFE),
)


def parse_scam_type(label: str) -> ScamType:
    for keywords, scam_type in SCAM_TYPE_RULES:
        if any(kw in label for kw in keywords):
            return scam_type
    return ScamType.UNKNOWN


# ---------------------------------------------------------------------------
# JSON extraction
# ---------------------------------------------------------------------------

def extract_json_span(raw: str) -> Optional[str]:
    """Return the text from the first ``{`` to the last ``}``, inclusive.

    Models often wrap the object in prose or code fences; everything outside
    the outermost braces is dropped. Braces inside string values are not
    treated specially, so a stray ``}`` after the real object is included in
    the span and makes it fail to parse.
    """
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return raw[start : end + 1]


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def parse_response(raw: Optional[str]) -> Optional[ScamAnalysis]:
    """Interpret a model generation as a ScamAnalysis, or None if unusable."""
    if not raw or not raw.strip():
        return None

    try:
        span = extract_json_span(raw)
        if span is None:
            logger.warning("No JSON object found in LLM response: %r", raw[:200])
            return None

        llm_result = LLMResponse.model_validate_json(span)

        return ScamAnalysis(
            is_scam=llm_result.isScam,
            confidence=max(0.0, min(1.0, llm_result.confidence)),
            reasons=llm_result.reasons,
            detected_keywords=[],
            detection_method=DetectionMethod.LLM,
            scam_type=parse_scam_type(llm_result.scamType),
            warning_message=llm_result.warningMessage,
            suspicious_parts=llm_result.suspiciousParts,
        )
    except ValidationError as exc:
        logger.warning("LLM response did not match the expected schema: %s", exc)
        return None
    except Exception as exc:
        logger.error("Failed to parse LLM response %r: %s", raw[:200], exc, exc_info=True)
        return None
