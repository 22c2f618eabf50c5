"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    posts_dir: Path = Path("posts")
    post_extension: str = ".md"
    templates_dir: Path = PACKAGE_DIR / "templates"
    static_dir: Path = PACKAGE_DIR / "static"
    debug: bool = False
    app_title: str = "HTMX Blog"
    home_title: str = "Home Page"
    list_title: str = "Blog Posts"
    fragment_header: str = "HX-Request"
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(
        env_prefix="HTMXBLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
