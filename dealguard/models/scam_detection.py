from typing import Optional

from pydantic import BaseModel, Field


class ScamDetectionRequest(BaseModel):
    input: str = Field(
        ...,
        min_length=1,
        description="Chat message to analyze for investment or used-trade scam signals.",
    )


class DetectorStatus(BaseModel):
    llm_available: bool
    llm_state: str = Field(description="UNINITIALIZED, READY or CLOSED.")
    initialization_done: bool
    initialization_result: Optional[bool] = Field(
        default=None,
        description="Outcome of the background model warm-up; null while it is still running.",
    )
