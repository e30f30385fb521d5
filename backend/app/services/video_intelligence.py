import logging
import os
from datetime import timedelta
from typing import Any, Dict, List, Optional

from google.cloud import videointelligence_v1 as videointelligence
from google.oauth2 import service_account

from app.core.config import settings
from app.core.exceptions import ProviderError
from app.schemas.annotations import RawAnnotationResult

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"

class VideoIntelligenceProvider:
    """
    Annotation provider backed by Google Cloud Video Intelligence.

    The SDK client is created lazily on first use so that importing the app (or
    running the reduction alone) never touches credentials.
    """

    def __init__(self, client: Optional[Any] = None) -> None:
        self._client = client
        self.features = settings.feature_list
        self.segment_seconds = settings.ANALYSIS_SEGMENT_SECONDS
        self.timeout = settings.OPERATION_TIMEOUT_SECONDS

    @property
    def client(self):
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        credentials = None
        key_path = settings.GCP_CREDENTIALS_PATH
        if key_path and os.path.exists(key_path):
            credentials = service_account.Credentials.from_service_account_file(
                key_path, scopes=[CLOUD_PLATFORM_SCOPE]
            )
            logger.info(f"Using credentials from: {os.path.abspath(key_path)}")
        else:
            logger.warning(f"Credentials file {key_path} not found. Using application default credentials.")

        try:
            client = videointelligence.VideoIntelligenceServiceClient(credentials=credentials)
        except Exception as e:
            logger.error(f"Failed to initialize Video Intelligence client: {e}")
            raise ProviderError(f"Failed to initialize Video Intelligence client: {e}") from e

        logger.info(f"Video Intelligence client initialized (project: {settings.GCP_PROJECT_ID or 'default'})")
        return client

    def build_request(self, video_content: bytes) -> Dict[str, Any]:
        """Builds the annotate_video request for the configured features."""
        features: List[videointelligence.Feature] = []
        for name in self.features:
            try:
                features.append(videointelligence.Feature[name])
            except KeyError:
                raise ProviderError(f"Unsupported analysis feature: {name}") from None

        video_context: Dict[str, Any] = {
            "segments": [{
                "start_time_offset": timedelta(seconds=0),
                "end_time_offset": timedelta(seconds=self.segment_seconds),
            }]
        }
        if videointelligence.Feature.SPEECH_TRANSCRIPTION in features:
            video_context["speech_transcription_config"] = {
                "language_code": settings.SPEECH_LANGUAGE_CODE,
                "enable_automatic_punctuation": True,
            }

        return {
            "input_content": video_content,
            "features": features,
            "video_context": video_context,
        }

    def annotate(self, video_content: bytes) -> RawAnnotationResult:
        """Runs the long-running annotation job and returns the first result."""
        request = self.build_request(video_content)
        logger.info(f"Sending {len(video_content)} bytes for analysis. Features: {', '.join(self.features)}")

        try:
            operation = self.client.annotate_video(request=request)
            logger.info(f"Operation ID: {operation.operation.name}")
            logger.info("Waiting for operation to complete...")
            response = operation.result(timeout=self.timeout)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(f"Video Intelligence request failed: {e}")
            raise ProviderError(str(e)) from e

        return self.to_raw_result(response)

    @staticmethod
    def to_raw_result(response: Any) -> RawAnnotationResult:
        """Converts the SDK response into the pipeline's raw result model."""
        payload = type(response).to_dict(response) if response is not None else {}
        results = payload.get("annotation_results") or []
        if not results:
            raise ProviderError("Invalid response from Video Intelligence API")

        first = results[0]
        received = [key for key, value in first.items() if value]
        logger.info(f"Annotation types received: {received}")
        if first.get("error"):
            logger.warning(f"Provider reported a partial error: {first['error']}")
        return RawAnnotationResult.model_validate(first)
