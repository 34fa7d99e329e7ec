"""Application configuration: settings schema and sitedoc.yaml loader"""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "sitedoc.yaml"


class CollectionConfig(BaseModel):
    output: bool = Field(default=False, description="Write documents of this collection to the destination")
    permalink: Optional[str] = Field(default=None, description="URL template; overrides the collection default")
    categories_from_path: bool = Field(default=False, description="Add sub-directory names as categories")


class DefaultScope(BaseModel):
    path: str = ""
    type: Optional[str] = None


class DefaultRule(BaseModel):
    """One front matter defaults entry: values applied to documents inside scope."""
    scope: DefaultScope = Field(default_factory=DefaultScope)
    values: dict[str, Any]


class Settings(BaseModel):
    app_name:            str = "sitedoc"
    source:              str = Field(default=".",      description="Site source directory")
    destination:         str = Field(default="output", description="Directory for rendered output files")
    collections_dir:     str = Field(default="",       description="Collections root, relative to source")
    encoding:            str = Field(default="utf-8",  description="Encoding used to read content files")
    strict_front_matter: bool = Field(default=False, description="Abort the run on any document read error")
    available_locales:   list[str] = Field(default_factory=lambda: ["en"])
    excerpt_separator:   str = Field(default="\n\n", description="Excerpt marker; empty disables excerpts")
    future:              bool = Field(default=False, description="Publish documents dated after site time")
    unpublished:         bool = Field(default=False, description="Publish documents marked published: false")
    time:                Optional[datetime] = Field(default=None, description="Site time; defaults to now")
    markdown_preset:     str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    max_workers:         int = Field(default=4, ge=1, description="Worker threads used to read documents")
    collections: dict[str, CollectionConfig] = Field(
        default_factory=lambda: {"posts": CollectionConfig(output=True)}
    )
    defaults: list[DefaultRule] = Field(default_factory=list)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from sitedoc.yaml, then SITEDOC_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"SITEDOC_{name.upper()}"):
            data[name] = val.split(",") if name == "available_locales" else val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
