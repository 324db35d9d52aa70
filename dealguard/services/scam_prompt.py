_SCAM_PROMPT = """\
당신은 사기 탐지 전문가입니다. 다음 메시지를 분석하고 JSON 형식으로만 응답하세요.

[탐지 대상]
1. 투자 사기: 고수익 보장, 원금 보장, 긴급 투자 권유, 비공개 정보 제공, 코인/주식 리딩방
2. 중고거래 사기: 선입금 요구, 안전결제 우회, 급매 압박, 타 플랫폼 유도, 직거래 회피, 허위 매물

[메시지]
{text}

[응답 형식 - JSON만 출력하세요]
{{
  "isScam": true 또는 false,
  "confidence": 0.0부터 1.0 사이 숫자,
  "scamType": "투자사기" 또는 "중고거래사기" 또는 "피싱" 또는 "정상",
  "warningMessage": "사용자에게 보여줄 경고 메시지 (한국어, 2문장 이내)",
  "reasons": ["위험 요소 1", "위험 요소 2"],
  "suspiciousParts": ["의심되는 문구 인용"]
}}\
"""


def build_prompt(text: str) -> str:
    """Embed a chat message in the scam-analysis instruction prompt.

    The message is inserted as-is. Text that imitates the template (for example
    its own ``[응답 형식]`` block) is not escaped and can steer the model.
    """
    return _SCAM_PROMPT.format(text=text)
