from fastapi.testclient import TestClient

from dealguard.main import create_app

from conftest import FakeEngineFactory

LLM_RESPONSE = (
    '결과입니다: {"isScam":true,"confidence":0.8,"scamType":"투자사기",'
    '"warningMessage":"투자 사기 위험이 있습니다.","reasons":["수익 약속"],'
    '"suspiciousParts":["무조건 오릅니다"]}'
)


def test_root(make_settings):
    app = create_app(make_settings(with_asset=False), engine_factory=FakeEngineFactory())
    with TestClient(app) as client:
        response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "API is running!"}


def test_rule_based_only_without_model(make_settings):
    app = create_app(make_settings(with_asset=False), engine_factory=FakeEngineFactory())
    with TestClient(app) as client:
        response = client.post("/scam", json={"input": "선입금 먼저 해주시면 택배만 가능해요"})
        llm_response = client.post("/scam/llm", json={"input": "선입금 먼저"})

    assert response.status_code == 200
    data = response.json()
    assert data["detectionMethod"] == "RULE_BASED"
    assert data["scamType"] == "USED_TRADE"
    assert "선입금" in data["detectedKeywords"]
    assert llm_response.status_code == 503


def test_empty_input_is_rejected(make_settings):
    app = create_app(make_settings(), engine_factory=FakeEngineFactory())
    with TestClient(app) as client:
        response = client.post("/scam", json={"input": ""})
    assert response.status_code == 422


def test_warmup_on_startup_enables_llm(make_settings):
    factory = FakeEngineFactory(responses=[LLM_RESPONSE, LLM_RESPONSE])
    app = create_app(make_settings(llm_warmup_on_startup=True), engine_factory=factory)

    with TestClient(app) as client:
        client.portal.call(app.state.initializer.wait)

        status = client.get("/scam/status").json()
        hybrid = client.post("/scam", json={"input": "이 코인 무조건 오릅니다"}).json()
        llm_only = client.post("/scam/llm", json={"input": "이 코인 무조건 오릅니다"}).json()

    assert status == {
        "llm_available": True,
        "llm_state": "READY",
        "initialization_done": True,
        "initialization_result": True,
    }
    assert hybrid["detectionMethod"] == "HYBRID"
    assert hybrid["scamType"] == "INVESTMENT"
    assert llm_only["detectionMethod"] == "LLM"
    assert llm_only["confidence"] == 0.8
    assert factory.engines[0].closed


def test_llm_only_reports_unusable_output(make_settings):
    factory = FakeEngineFactory(responses=["잘 모르겠어요"])
    app = create_app(make_settings(llm_warmup_on_startup=True), engine_factory=factory)

    with TestClient(app) as client:
        client.portal.call(app.state.initializer.wait)
        response = client.post("/scam/llm", json={"input": "안녕하세요"})

    assert response.status_code == 502


def test_status_without_warmup(make_settings):
    app = create_app(make_settings(), engine_factory=FakeEngineFactory())
    with TestClient(app) as client:
        status = client.get("/scam/status").json()

    assert status["llm_available"] is False
    assert status["llm_state"] == "UNINITIALIZED"
    assert status["initialization_done"] is False
    assert status["initialization_result"] is None
