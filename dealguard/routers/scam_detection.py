from fastapi import APIRouter, HTTPException, Request, status

from ..models.scam_analysis import ScamAnalysis
from ..models.scam_detection import DetectorStatus, ScamDetectionRequest
from ..services.hybrid_detector import BackgroundInitializer, HybridScamDetector

router = APIRouter(prefix="/scam", tags=["Scam Detection"])


def _detector(request: Request) -> HybridScamDetector:
    return request.app.state.detector


@router.post(
    "",
    response_model=ScamAnalysis,
    summary="Classify a chat message",
    description=(
        "Runs rule-based keyword detection and, when the on-device model is loaded, "
        "refines the verdict with the LLM. Falls back to rules alone otherwise."
    ),
)
async def detect_scam_route(body: ScamDetectionRequest, request: Request) -> ScamAnalysis:
    try:
        return await _detector(request).analyze(body.input)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Scam detection failed: {exc}",
        )


@router.post("/llm", response_model=ScamAnalysis, summary="Classify with the LLM only")
async def detect_scam_llm_route(body: ScamDetectionRequest, request: Request) -> ScamAnalysis:
    llm_detector = _detector(request).llm_detector
    if not llm_detector.is_available():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM model is not loaded.",
        )

    result = await llm_detector.analyze(body.input)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="LLM returned no usable analysis.",
        )
    return result


@router.get("/status", response_model=DetectorStatus)
def detector_status(request: Request) -> DetectorStatus:
    detector = _detector(request)
    initializer: BackgroundInitializer = request.app.state.initializer
    return DetectorStatus(
        llm_available=detector.is_llm_available(),
        llm_state=detector.llm_detector.state.value,
        initialization_done=initializer.done,
        initialization_result=initializer.result,
    )
