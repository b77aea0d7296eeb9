import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    SEED_EMPLOYEE_COUNT: int = 35
    SEED_RANDOM_SEED: int = 42
    SIMULATED_LATENCY_MS: int = 0

    EXPORT_FILENAME_PREFIX: str = "employees"
    EXPORT_PREVIEW_ROWS: int = 5

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
