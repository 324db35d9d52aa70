from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ScamType(str, Enum):
    INVESTMENT = "INVESTMENT"
    USED_TRADE = "USED_TRADE"
    PHISHING = "PHISHING"
    IMPERSONATION = "IMPERSONATION"
    ROMANCE = "ROMANCE"
    LOAN = "LOAN"
    SAFE = "SAFE"
    UNKNOWN = "UNKNOWN"


class DetectionMethod(str, Enum):
    RULE_BASED = "RULE_BASED"
    LLM = "LLM"
    HYBRID = "HYBRID"


class ScamAnalysis(BaseModel):
    """Verdict for a single chat message.

    Field names are snake_case in Python and camelCase on the wire, the same
    keys the model is asked to emit.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_scam: bool = Field(alias="isScam")
    confidence: float = Field(ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)
    detected_keywords: list[str] = Field(default_factory=list, alias="detectedKeywords")
    detection_method: DetectionMethod = Field(alias="detectionMethod")
    scam_type: ScamType = Field(default=ScamType.UNKNOWN, alias="scamType")
    warning_message: str = Field(default="", alias="warningMessage")
    suspicious_parts: list[str] = Field(default_factory=list, alias="suspiciousParts")


class LLMResponse(BaseModel):
    """Shape of the JSON object the model is prompted to produce.

    Only used while interpreting a generation; missing keys fall back to the
    defaults below, values of the wrong type fail validation.
    """

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    isScam: bool = False
    confidence: float = 0.0
    scamType: str = "정상"
    warningMessage: str = ""
    reasons: list[str] = Field(default_factory=list)
    suspiciousParts: list[str] = Field(default_factory=list)
