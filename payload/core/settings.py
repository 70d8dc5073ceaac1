"""Unified settings for http-payload."""

import importlib.metadata
import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def read_pyproject(pyproject_path: Path) -> dict:
    """Read pyproject.toml into a dict, empty when the file is not shipped."""
    if not pyproject_path.is_file():
        return {}
    with pyproject_path.open("rb") as file_handle:
        return tomllib.load(file_handle)


def get_version(project: dict) -> str:
    """Get version from installed package metadata or fallback to pyproject."""
    name = project.get("project", {}).get("name", "http-payload")
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return project.get("project", {}).get("version", "0.0.0")


class Settings(BaseSettings):
    """Unified settings for payload construction."""

    DEBUG: bool = True
    ENVIRONMENT: Literal["DEV", "PROD"] = "DEV"
    LOG_LEVEL: str = "INFO"

    # ClassVar to prevent Pydantic from trying to load from env
    BASE_DIR: ClassVar[Path] = Path(__file__).parent.parent.parent
    PROJECT: ClassVar[dict] = read_pyproject(BASE_DIR / "pyproject.toml")
    PACKAGE_NAME: ClassVar[str] = PROJECT.get("project", {}).get("name", "http-payload")
    PACKAGE_DESCRIPTION: ClassVar[str] = PROJECT.get("project", {}).get("description", "HTTP request body builder")
    PACKAGE_VERSION: ClassVar[str] = get_version(PROJECT)

    # Content types
    JSON_CONTENT_TYPE: ClassVar[str] = "application/json; charset=utf-8"
    FORM_CONTENT_TYPE: ClassVar[str] = "application/x-www-form-urlencoded; charset=utf-8"
    MULTIPART_FILE_CONTENT_TYPE: ClassVar[str] = "application/octet-stream"

    # Encoding
    TEXT_ENCODING: str = "utf-8"
    COPY_CHUNK_SIZE: int = 64 * 1024

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()  # type: ignore
