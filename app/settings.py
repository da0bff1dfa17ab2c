from pathlib import Path
from typing import Any, List
from urllib.request import getproxies

import dotenv
from loguru import logger
from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from telegram.ext import Application

from utils import parse_boolean, parse_comma_separated_list

dotenv.load_dotenv()


PROJECT_DIR = Path(__file__).parent
LOG_DIR = PROJECT_DIR.joinpath("logs")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    TELEGRAM_BOT_API_TOKEN: SecretStr = Field(
        default=SecretStr(""), description="Bot API token issued by https://t.me/BotFather"
    )

    GEMINI_API_KEY: SecretStr = Field(
        default=SecretStr(""), description="API key for the Google Gemini generateContent endpoint"
    )

    GEMINI_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API root",
    )

    MODEL_NAME: str = Field(
        default="gemini-2.0-flash",
        validation_alias=AliasChoices("MODEL_NAME", "GEMINI_MODEL"),
        description="Model used for both language detection and translation",
    )

    SUPPORTED_LANGUAGES: str = Field(
        default="en",
        description="Comma separated language codes, used as the default translation targets",
    )

    FALLBACK_LANGUAGE: str = Field(
        default="en",
        description="Language code assumed when detection fails or returns an unsupported code",
    )

    RESTRICT_DETECTED_LANGUAGE: bool = Field(
        default=True,
        description="Map detected codes outside the supported/target set to FALLBACK_LANGUAGE",
    )

    INLINE_TRANSLATE_FLAG: str = Field(
        default="+t",
        description="A message containing this marker is translated even if the chat is disabled",
    )

    INCLUDE_ORIGINAL_TEXT: bool = Field(
        default=False,
        description="Echo the original text under its detected language when it is a target",
    )

    DEDUP_WINDOW_SECONDS: float = Field(
        default=3600.0, description="How long a processed message id is remembered"
    )

    DEBUG: bool = Field(default=False, description="Verbose logging and full tracebacks")

    PORT: int = Field(default=3000, description="Port of the liveness HTTP endpoint")

    HTTP_REQUEST_TIMEOUT: float = Field(
        default=75.0, description="Timeout (seconds) for Telegram Bot API calls"
    )

    GEMINI_REQUEST_TIMEOUT: float = Field(
        default=60.0, description="Timeout (seconds) for a single Gemini request"
    )

    @field_validator("DEBUG", "RESTRICT_DETECTED_LANGUAGE", "INCLUDE_ORIGINAL_TEXT", mode="before")
    @classmethod
    def _lenient_boolean(cls, value: Any, info) -> bool:
        default = cls.model_fields[info.field_name].default
        return parse_boolean(value, default)

    def model_post_init(self, context: Any, /) -> None:
        self.FALLBACK_LANGUAGE = self.FALLBACK_LANGUAGE.strip().lower() or "en"

        if not self.INLINE_TRANSLATE_FLAG.strip():
            logger.warning("INLINE_TRANSLATE_FLAG is blank, falling back to '+t'")
            self.INLINE_TRANSLATE_FLAG = "+t"

    @property
    def supported_languages(self) -> List[str]:
        """SUPPORTED_LANGUAGES as lowercase codes, never empty"""
        codes = []
        for code in parse_comma_separated_list(self.SUPPORTED_LANGUAGES):
            if code.lower() not in codes:
                codes.append(code.lower())
        return codes or ["en"]

    def missing_credentials(self) -> List[str]:
        missing = []
        if not self.TELEGRAM_BOT_API_TOKEN.get_secret_value():
            missing.append("TELEGRAM_BOT_API_TOKEN")
        if not self.GEMINI_API_KEY.get_secret_value():
            missing.append("GEMINI_API_KEY")
        return missing

    def get_default_application(self) -> Application:
        _base_builder = (
            Application.builder()
            .token(self.TELEGRAM_BOT_API_TOKEN.get_secret_value())
            .connect_timeout(self.HTTP_REQUEST_TIMEOUT)
            .write_timeout(self.HTTP_REQUEST_TIMEOUT)
            .read_timeout(self.HTTP_REQUEST_TIMEOUT)
        )
        if proxy_url := getproxies().get("http"):
            logger.success(f"Using proxy: {proxy_url}")
            application = _base_builder.proxy(proxy_url).get_updates_proxy(proxy_url).build()
        else:
            application = _base_builder.build()

        return application


settings = Settings()  # type: ignore
