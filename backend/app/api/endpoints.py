import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.timeline import AnalysisReport
from app.services.video_analyzer import REDUCTION_STRATEGIES, VideoAnalyzer
from app.services.video_intelligence import VideoIntelligenceProvider

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()

@lru_cache(maxsize=1)
def get_video_analyzer() -> VideoAnalyzer:
    """Shared analyzer. The provider builds its SDK client on the first request."""
    return VideoAnalyzer(provider=VideoIntelligenceProvider())

@router.post(
    "/analyze-video",
    response_model=AnalysisReport,
    response_model_exclude_none=True,
)
async def analyze_video(
    video: Optional[UploadFile] = File(None),
    query: Optional[str] = Form(None),
    mode: Optional[str] = Form(None),
    analyzer: VideoAnalyzer = Depends(get_video_analyzer),
):
    """
    Endpoint to analyze an uploaded video.
    Sends it to the video analysis provider and returns the reduced report.
    """
    if video is None:
        return JSONResponse(status_code=400, content={"error": "No video file uploaded"})

    if mode and mode not in REDUCTION_STRATEGIES:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Unknown analysis mode",
                "details": f"Expected one of: {', '.join(REDUCTION_STRATEGIES)}",
            },
        )

    logger.info("Processing video analysis request...")
    content = await video.read()
    logger.info(f"Video file size: {len(content)} bytes")
    logger.info(f"Video mime type: {video.content_type}")

    if len(content) > settings.MAX_UPLOAD_BYTES:
        return JSONResponse(
            status_code=413,
            content={
                "error": "Video file too large",
                "details": f"Maximum upload size is {settings.MAX_UPLOAD_BYTES} bytes",
            },
        )

    # The provider call blocks until the long-running job resolves.
    return await run_in_threadpool(analyzer.analyze_video, content, query=query, mode=mode)
