"""Unified settings for formwire."""

import importlib.metadata
import tomllib
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from formwire.models.core import DEFAULT_BOUNDARY


def read_pyproject(pyproject_path: Path) -> dict:
    """Read pyproject.toml into a dict, empty when the package runs from an installed wheel."""
    if not pyproject_path.is_file():
        return {}
    with pyproject_path.open("rb") as file_handle:
        return tomllib.load(file_handle)


def get_version(project: dict) -> str:
    """Get version from installed package metadata, falling back to pyproject."""
    try:
        return importlib.metadata.version("formwire")
    except importlib.metadata.PackageNotFoundError:
        return project.get("project", {}).get("version", "0.0.0")


class Settings(BaseSettings):
    """Unified settings for the encoding layer."""

    DEBUG: bool = True
    ENVIRONMENT: Literal["DEV", "PROD"] = "DEV"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # ClassVar to prevent Pydantic from trying to load from env
    BASE_DIR: ClassVar[Path] = Path(__file__).parent.parent.parent
    PROJECT: ClassVar[dict] = read_pyproject(BASE_DIR / "pyproject.toml")
    NAME: ClassVar[str] = PROJECT.get("project", {}).get("name", "formwire")
    VERSION: ClassVar[str] = get_version(PROJECT)

    # Multipart
    MULTIPART_BOUNDARY: str = Field(default=DEFAULT_BOUNDARY, min_length=1, max_length=70)

    # Streaming
    STREAM_CHUNK_SIZE: int = Field(default=16 * 1024, gt=0)

    # JSON
    JSON_CODEC: Literal["orjson", "none"] = "orjson"

    model_config = SettingsConfigDict(env_prefix="FORMWIRE_", env_file=".env", env_file_encoding="utf-8")


settings = Settings()  # type: ignore
