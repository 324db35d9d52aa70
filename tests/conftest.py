from pathlib import Path

import pytest

from dealguard.config import Settings
from dealguard.services.llm_engine import EngineConfig


class FakeEngine:
    """Stands in for the on-device model; returns canned generations."""

    def __init__(self, config: EngineConfig, responses=None):
        self.config = config
        self.responses = list(responses or [])
        self.prompts: list[str] = []
        self.closed = False

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            return ""
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


class FakeEngineFactory:
    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = responses
        self.error = error
        self.engines: list[FakeEngine] = []

    def __call__(self, config: EngineConfig) -> FakeEngine:
        if self.error is not None:
            raise self.error
        engine = FakeEngine(config, self.responses)
        self.engines.append(engine)
        return engine


@pytest.fixture
def make_settings(tmp_path: Path):
    def _make(with_asset: bool = True, **overrides) -> Settings:
        asset_dir = tmp_path / "assets"
        if with_asset:
            model = asset_dir / "models" / "tiny-model.bin"
            model.parent.mkdir(parents=True, exist_ok=True)
            model.write_bytes(b"weights")
        values = dict(
            model_path="models/tiny-model.bin",
            model_asset_dir=str(asset_dir),
            model_data_dir=str(tmp_path / "data"),
            llm_warmup_on_startup=False,
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
