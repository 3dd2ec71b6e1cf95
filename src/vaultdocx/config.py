"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "VAULTDOCX_"


class Settings(BaseModel):
    app_name:             str   = "vaultdocx"
    font:                 str   = Field(default="Georgia", description="Font for body text and headings")
    body_size:            int   = Field(default=24,  ge=1, description="Body font size in half-points")
    heading_size:         int   = Field(default=36,  ge=1, description="Heading font size in half-points")
    first_line_indent_mm: float = Field(default=10.0, ge=0, description="First-line indent of body paragraphs")
    line_spacing:         int   = Field(default=320, ge=1, description="Body line spacing in twips; 240 = single")
    heading_line_spacing: int   = Field(default=240, ge=1, description="Heading line spacing in twips")
    heading_space_after:  int   = Field(default=480, ge=0, description="Space after headings in twips")
    title_field:          str   = Field(default="dxtitle", description="Front-matter field used as note title")
    markdown_extension:   str   = Field(default="md",   description="Extension of exported notes")
    output_extension:     str   = Field(default="docx", description="Extension of the written document")
    parser_config:        str   = Field(default="gfm-like", description="MarkdownIt parser preset name")
    menu_title:           str   = "Export as Word document"
    menu_icon:            str   = "file-output"
    log_level:            str   = Field(default="WARNING", description="Root log level")
    log_format:           str   = Field(default="console", pattern="^(console|json)$", description="console or json")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then VAULTDOCX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
