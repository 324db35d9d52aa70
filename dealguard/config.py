from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        protected_namespaces=(),
    )

    model_path: str = "models/gemma-2b-it"
    model_asset_dir: str = "assets"
    model_data_dir: str = "data"
    tokenizer_path: Optional[str] = None
    llm_max_tokens: int = 512
    llm_temperature: float = 0.7
    llm_top_k: int = 40
    llm_warmup_on_startup: bool = True

    rule_scam_threshold: float = 0.5
    rule_confident_threshold: float = 0.8
    hybrid_rule_weight: float = 0.3

    log_level: str = "INFO"


settings = Settings()
