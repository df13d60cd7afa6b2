from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Address the app is served from; share links are built on top of it
    SHARE_BASE_URL: str = "http://localhost:8501/"
    PAGE_TITLE: str = "Point Potential Calculator"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
