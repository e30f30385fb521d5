from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple

class TimelineEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: int = Field(ge=0)  # seconds from the start of the video
    event: str
    confidence: int = Field(ge=0, le=100)

class Timeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    events: Tuple[TimelineEvent, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.events

class LabelSummary(BaseModel):
    description: str
    confidence: int = Field(ge=0, le=100)

class AnalysisReport(BaseModel):
    analysis: str
    confidence: int = Field(ge=0, le=100)
    labels: Optional[List[LabelSummary]] = None
