from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    admin_password: str
    secret_key: str
    database_url: str = "sqlite+aiosqlite:///./data/database.sqlite"
    log_level: str = "INFO"

    # Public site settings (used for canonical links and share cards)
    site_url: str = "http://localhost:3000"
    site_name: str = "Kitchenmarks"
    site_description: str = "A hand-picked collection of delicious recipes from around the web"
    cors_origin: str = "*"
    dist_dir: Path = Path("./dist")

    token_max_age_days: int = 30

    # Scraper settings
    scraper_timeout: float = 10.0  # Seconds before a fetch is abandoned
    scraper_max_redirects: int = 3
    scraper_user_agent: str = "Mozilla/5.0 (compatible; Kitchenmarks/1.0)"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]

    @property
    def token_max_age(self) -> int:
        return self.token_max_age_days * 24 * 60 * 60


settings = Settings()
