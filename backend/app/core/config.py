import os
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings

AnalysisMode = Literal["timeline", "summary"]

class Settings(BaseSettings):
    PROJECT_NAME: str = "ClipLens"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Google Cloud
    # The key file is optional: when missing we fall back to application default credentials.
    GCP_PROJECT_ID: Optional[str] = os.getenv("GCP_PROJECT_ID") or None
    GCP_CREDENTIALS_PATH: str = os.getenv("GCP_CREDENTIALS_PATH", "./credentials.json")

    # --- Video Intelligence request ---
    ANALYSIS_FEATURES: str = os.getenv(
        "ANALYSIS_FEATURES", "LABEL_DETECTION,OBJECT_TRACKING,SHOT_CHANGE_DETECTION"
    )
    ANALYSIS_SEGMENT_SECONDS: int = int(os.getenv("ANALYSIS_SEGMENT_SECONDS", "60"))
    OPERATION_TIMEOUT_SECONDS: float = float(os.getenv("OPERATION_TIMEOUT_SECONDS", "600"))
    SPEECH_LANGUAGE_CODE: str = os.getenv("SPEECH_LANGUAGE_CODE", "en-US")

    # --- Reduction ---
    ANALYSIS_MODE: AnalysisMode = os.getenv("ANALYSIS_MODE", "timeline")
    HIGH_CONFIDENCE_THRESHOLD: float = float(os.getenv("HIGH_CONFIDENCE_THRESHOLD", "0.7"))

    # --- HTTP ---
    MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(50 * 1024 * 1024)))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    class Config:
        case_sensitive = True
        env_file = ".env"

    @property
    def feature_list(self) -> List[str]:
        return [f.strip().upper() for f in self.ANALYSIS_FEATURES.split(",") if f.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
