import pytest

from dealguard.models.scam_analysis import DetectionMethod, ScamType
from dealguard.services.rule_detector import RuleBasedDetector


@pytest.fixture
def detector(make_settings):
    return RuleBasedDetector(make_settings())


def test_safe_message(detector):
    result = detector.analyze("내일 점심 같이 먹을래?")

    assert result.is_scam is False
    assert result.confidence == 0.0
    assert result.scam_type is ScamType.SAFE
    assert result.detected_keywords == []
    assert result.warning_message == ""
    assert result.detection_method is DetectionMethod.RULE_BASED


def test_investment_scam(detector):
    result = detector.analyze("VIP방 리딩방 입장하시면 원금 보장에 고수익 드립니다")

    assert result.is_scam is True
    assert result.scam_type is ScamType.INVESTMENT
    assert result.confidence == pytest.approx(0.55)
    assert "원금 보장" in result.detected_keywords
    assert "vip방" in result.detected_keywords
    assert result.warning_message


def test_used_trade_scam(detector):
    result = detector.analyze("안전결제 말고 계좌로 바로 보내주세요. 선입금 해주시면 택배만 가능해요")

    assert result.is_scam is True
    assert result.scam_type is ScamType.USED_TRADE
    assert result.reasons[0] == "물건을 받기 전에 선입금을 요구합니다"


def test_urgency_alone_is_not_a_scam(detector):
    result = detector.analyze("긴급 공지: 오늘만 할인")

    assert result.is_scam is False
    assert result.scam_type is ScamType.UNKNOWN
    assert result.confidence == pytest.approx(0.1)


def test_score_is_capped(detector):
    text = (
        "원금 보장 리딩방 선입금 안전결제 말고 급매 링크를 눌러 "
        "금감원 자기야 저금리 대출 긴급"
    )
    result = detector.analyze(text)

    assert result.confidence == 1.0
