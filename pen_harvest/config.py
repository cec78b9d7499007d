"""
Loading and validation of the PenHarvest configuration.
The schema is described with Pydantic; YAML and JSON files are supported.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class PenLink(BaseModel):
    """A pen given directly by the user, bypassing search."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(..., description="Title used for the output filename and index.")
    url: HttpUrl = Field(..., description="Absolute link to the pen's detail page.")


class HarvestConfig(BaseModel):
    """Configuration for one harvest run."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    search_query: str = Field("flexbox", min_length=1, description="Search string.")
    search_url: HttpUrl = Field("https://codepen.io/search/pens", description="Search endpoint.")
    start_page: int = Field(1, ge=1, description="First search results page (1-indexed).")
    end_page: int = Field(4, ge=1, description="Last search results page, inclusive.")

    output_dir: Path = Field(Path("pens"), description="Where pens and index.html are written.")
    debug_dir: Path = Field(Path("debug"), description="Where diagnostic screenshots go.")
    debug: bool = Field(False, description="Take before/after screenshots of every pen.")
    headless: Optional[bool] = Field(None, description="Browser headless mode; defaults to `not debug`.")
    viewport_width: int = Field(1400, gt=0)
    viewport_height: int = Field(800, gt=0)
    navigation_timeout: Optional[float] = Field(
        None, gt=0, description="Timeout for each browser wait (seconds); None keeps Playwright's."
    )

    pen_template: Path = Field(TEMPLATES_DIR / "pen.html", description="Single pen page template.")
    index_template: Path = Field(TEMPLATES_DIR / "index.html", description="Index page template.")
    index_filename: str = Field("index.html", min_length=1)

    links: List[PenLink] = Field(
        default_factory=list, description="Direct pen links; when set, search is skipped."
    )

    @field_validator("search_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @model_validator(mode="after")
    def _check_page_range(self) -> HarvestConfig:
        if self.end_page < self.start_page:
            raise ValueError(
                f"end_page ({self.end_page}) must not be lower than start_page ({self.start_page})"
            )
        return self

    @model_validator(mode="after")
    def _check_templates_exist(self) -> HarvestConfig:
        missing = [p for p in (self.pen_template, self.index_template) if not Path(p).is_file()]
        if missing:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(missing[0]))
        return self

    @property
    def is_headless(self) -> bool:
        return (not self.debug) if self.headless is None else self.headless

    @property
    def timeout_ms(self) -> Optional[float]:
        """Timeout in the unit Playwright expects, or None for its default."""
        return None if self.navigation_timeout is None else self.navigation_timeout * 1000


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> HarvestConfig:
    """
    Read a YAML or JSON file and return a validated HarvestConfig.

    With ``path=None`` the default ``configs/default.yaml`` is used when it
    exists, otherwise the built-in defaults. An explicit path that does not
    exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return HarvestConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return HarvestConfig(**data)


__all__ = ["HarvestConfig", "PenLink", "load_config", "TEMPLATES_DIR"]
