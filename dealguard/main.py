import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from dealguard.config import Settings, settings as default_settings
from dealguard.routers.scam_detection import router as scam_detection_router
from dealguard.services.hybrid_detector import BackgroundInitializer, HybridScamDetector
from dealguard.services.llm_engine import EngineFactory, create_engine
from dealguard.services.llm_scam_detector import LLMScamDetector
from dealguard.services.rule_detector import RuleBasedDetector

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    engine_factory: EngineFactory = create_engine,
) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        detector = HybridScamDetector(
            rule_detector=RuleBasedDetector(settings),
            llm_detector=LLMScamDetector(settings, engine_factory=engine_factory),
            settings=settings,
        )
        initializer = BackgroundInitializer(detector)
        app.state.detector = detector
        app.state.initializer = initializer

        logger.info("DealGuard API started")
        if settings.llm_warmup_on_startup:
            initializer.start()

        try:
            yield
        finally:
            initializer.cancel()
            detector.close()

    app = FastAPI(title="DealGuard API", lifespan=lifespan)
    app.include_router(scam_detection_router)

    @app.get("/")
    def root():
        return {"message": "API is running!"}

    return app


app = create_app()
