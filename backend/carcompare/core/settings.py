from pydantic import BaseModel, ConfigDict, field_validator
import os

class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    host: str = os.getenv("CARCOMPARE_HOST", "127.0.0.1")
    port: int = os.getenv("PORT", "3000")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "json")  # json|text
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        return [origin.strip() for origin in v if origin and origin.strip()]

settings = Settings()
