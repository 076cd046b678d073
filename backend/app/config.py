"""Application settings and validation."""

import os


class Settings:
    ENV: str
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    MAX_BODY_BYTES: int
    QUESTION_API_URL: str
    FORM_TIMEOUT_SECONDS: float
    STYLE_TOKENS_FILE: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(64 * 1024)))  # 64 KB default
        # Empty means the form pages talk to this same app in-process.
        self.QUESTION_API_URL = os.getenv("QUESTION_API_URL", "").strip().rstrip("/")
        self.FORM_TIMEOUT_SECONDS = float(os.getenv("FORM_TIMEOUT_SECONDS", "10"))
        self.STYLE_TOKENS_FILE = os.getenv("STYLE_TOKENS_FILE", "").strip()
        self._validate()

    def _validate(self):
        if self.MAX_BODY_BYTES <= 0:
            raise RuntimeError("MAX_BODY_BYTES must be a positive integer")
        if self.FORM_TIMEOUT_SECONDS <= 0:
            raise RuntimeError("FORM_TIMEOUT_SECONDS must be positive")
        if self.QUESTION_API_URL and not self.QUESTION_API_URL.startswith(("http://", "https://")):
            raise RuntimeError("QUESTION_API_URL must be an http(s) URL")


settings = Settings()
