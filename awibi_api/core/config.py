"""App settings and config loader."""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
	"http://localhost:3000",
	"http://localhost:5173",
	"http://127.0.0.1:3000",
	"http://127.0.0.1:5173",
]

class Settings(BaseSettings):
	# Server
	HOST: str = Field(default="0.0.0.0")
	PORT: int = Field(default=5000, ge=0, le=65535)

	# Logging
	LOG_LEVEL: str = Field(default="INFO")
	UVICORN_LOG_LEVEL: str = Field(default="warning")

	# Request parsing
	JSON_BODY_LIMIT: int = Field(default=100 * 1024, gt=0)  # bytes

	# CORS
	FRONTEND_URL: Optional[str] = Field(default=None)
	CORS_ORIGIN_REGEX: str = Field(default=r"https://.*\.vercel\.app")

	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

	def cors_origins(self) -> list[str]:
		"""Return the origins allowed to call the API from a browser."""
		origins = list(DEFAULT_CORS_ORIGINS)
		if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
			origins.append(self.FRONTEND_URL)
		return origins

@lru_cache(maxsize=1)
def get_settings() -> Settings:
	"""Return cached settings instance."""
	return Settings()
