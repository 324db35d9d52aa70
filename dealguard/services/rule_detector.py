import logging

from ..config import Settings, settings as default_settings
from ..models.scam_analysis import DetectionMethod, ScamAnalysis, ScamType

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Keyword signals
# ---------------------------------------------------------------------------

# Each entry: (keywords, reason_label, score_weight, scam_type)
SCAM_SIGNALS: list[tuple[list[str], str, int, ScamType]] = [
    (
        ["원금 보장", "원금보장", "수익 보장", "수익보장", "고수익", "확정 수익", "손실 없"],
        "고수익 또는 원금 보장을 약속합니다",
        30,
        ScamType.INVESTMENT,
    ),
    (
        ["리딩방", "코인 추천", "급등주", "종목 추천", "비공개 정보", "내부 정보", "vip방"],
        "리딩방이나 비공개 투자 정보를 제공한다고 주장합니다",
        25,
        ScamType.INVESTMENT,
    ),
    (
        ["선입금", "입금 먼저", "먼저 입금", "계약금 먼저", "예약금"],
        "물건을 받기 전에 선입금을 요구합니다",
        30,
        ScamType.USED_TRADE,
    ),
    (
        ["안전결제 말고", "직접 송금", "계좌로 바로", "카톡으로 연락", "카카오톡으로", "텔레그램", "다른 앱으로"],
        "안전결제를 피하거나 다른 플랫폼으로 유도합니다",
        25,
        ScamType.USED_TRADE,
    ),
    (
        ["직거래 불가", "직거래는 어렵", "택배만 가능", "급매", "시세보다 싸게"],
        "직거래를 회피하거나 급매로 압박합니다",
        15,
        ScamType.USED_TRADE,
    ),
    (
        ["링크를 눌러", "링크 클릭", "본인 인증", "인증번호", "비밀번호", "계좌 정지", "앱 설치"],
        "링크 접속이나 개인정보 입력을 유도합니다",
        25,
        ScamType.PHISHING,
    ),
    (
        ["검찰", "금융감독원", "금감원", "경찰청", "수사관", "엄마 폰", "아빠 폰", "폰이 고장"],
        "기관이나 가족을 사칭합니다",
        30,
        ScamType.IMPERSONATION,
    ),
    (
        ["자기야", "보고 싶어", "해외 파병", "선물을 보냈", "통관비"],
        "친밀감을 쌓은 뒤 금전을 요구하는 로맨스 스캠 유형입니다",
        20,
        ScamType.ROMANCE,
    ),
    (
        ["저금리 대출", "대환 대출", "신용 상관없이", "무직자 대출", "대출 승인"],
        "조건 없는 저금리 대출을 권유합니다",
        20,
        ScamType.LOAN,
    ),
    (
        ["긴급", "지금 바로", "오늘만", "마감 임박", "서두르", "빨리"],
        "긴급함을 강조하며 판단할 시간을 주지 않습니다",
        10,
        ScamType.UNKNOWN,
    ),
]


# ---------------------------------------------------------------------------
# Warning messages
# ---------------------------------------------------------------------------

_WARNINGS: dict[ScamType, str] = {
    ScamType.INVESTMENT: "투자 사기가 의심됩니다. 원금이나 고수익을 보장하는 투자 권유는 응하지 마세요.",
    ScamType.USED_TRADE: "중고거래 사기가 의심됩니다. 선입금을 보내지 말고 안전결제를 이용하세요.",
    ScamType.PHISHING: "피싱이 의심됩니다. 링크를 누르거나 개인정보를 입력하지 마세요.",
    ScamType.IMPERSONATION: "사칭 사기가 의심됩니다. 공식 번호로 직접 확인하세요.",
    ScamType.ROMANCE: "로맨스 스캠이 의심됩니다. 만난 적 없는 사람에게 송금하지 마세요.",
    ScamType.LOAN: "대출 사기가 의심됩니다. 선수수료나 개인정보를 요구하면 응하지 마세요.",
    ScamType.UNKNOWN: "사기가 의심되는 메시지입니다. 송금 전에 한 번 더 확인하세요.",
}


def warning_for(scam_type: ScamType) -> str:
    return _WARNINGS.get(scam_type, "")


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

class RuleBasedDetector:
    """Keyword scoring over SCAM_SIGNALS; always returns a verdict."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or default_settings

    def analyze(self, text: str) -> ScamAnalysis:
        text_lower = text.lower()
        total_score = 0
        reasons: list[str] = []
        keywords: list[str] = []
        heaviest: tuple[int, ScamType] | None = None

        for signal_keywords, reason, weight, scam_type in SCAM_SIGNALS:
            matched = [kw for kw in signal_keywords if kw in text_lower]
            if not matched:
                continue
            total_score += weight
            reasons.append(reason)
            keywords.extend(matched)
            if scam_type is not ScamType.UNKNOWN and (heaviest is None or weight > heaviest[0]):
                heaviest = (weight, scam_type)

        confidence = min(total_score, 100) / 100
        is_scam = confidence >= self._settings.rule_scam_threshold

        if heaviest is not None:
            scam_type = heaviest[1]
        elif keywords:
            scam_type = ScamType.UNKNOWN
        else:
            scam_type = ScamType.SAFE

        logger.debug("Rule-based score %.2f for %d matched keywords", confidence, len(keywords))

        return ScamAnalysis(
            is_scam=is_scam,
            confidence=confidence,
            reasons=reasons,
            detected_keywords=keywords,
            detection_method=DetectionMethod.RULE_BASED,
            scam_type=scam_type,
            warning_message=warning_for(scam_type) if is_scam else "",
            suspicious_parts=list(keywords),
        )
