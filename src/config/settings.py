"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MARPEXT_ prefix (e.g., MARPEXT_ENABLE_MARK_PLUGIN=false).

Settings can also be loaded from a .env file in the project root.

Settings are read when an engine or pipeline is built and then handed to the
parsing rules explicitly, so the rules themselves never consult this module.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MARPEXT_ prefix.

    Examples:
        MARPEXT_ENABLE_DIRECTIVE_SHORTHAND=false
        MARPEXT_CONTAINER_MARKER=:
        MARPEXT_MODE=unsafe
    """

    model_config = SettingsConfigDict(
        env_prefix="MARPEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Extension toggles
    enable_directive_shorthand: bool = Field(
        default=True,
        description="Expand /// directive shorthand lines into Marp comment directives",
    )

    enable_container_plugin: bool = Field(
        default=True,
        description="Recognize ::: nestable container blocks",
    )

    enable_mark_plugin: bool = Field(
        default=True,
        description="Recognize ==highlighted== inline text",
    )

    # Grammar configuration
    container_marker: str = Field(
        default=":",
        min_length=1,
        max_length=1,
        description="Character whose repetition opens and closes a container",
    )

    container_min_markers: int = Field(
        default=3,
        ge=1,
        description="Minimum marker run length for a container line",
    )

    directive_marker: str = Field(
        default="/",
        min_length=1,
        max_length=1,
        description="Character whose repetition (3 or more) starts a directive shorthand line",
    )

    default_container_tag: str = Field(
        default="div",
        description="Element used for containers whose selector names no tag",
    )

    # Rendering configuration
    enable_html: bool = Field(
        default=True,
        description="Allow raw HTML in source (generated directive comments are HTML)",
    )

    code_style: str = Field(
        default="monokai",
        description="Pygments style used for inline-styled code fence highlighting",
    )

    # Diagram configuration
    mermaid_enabled: bool = Field(
        default=True,
        description="Render ```mermaid fences through the supplied diagram renderer",
    )

    plantuml_enabled: bool = Field(
        default=False,
        description="Render ```plantuml / ```puml fences through the supplied diagram renderer",
    )

    mode: Literal["safe", "unsafe"] = Field(
        default="safe",
        description="Security mode: diagram rendering on the export path requires 'unsafe'",
    )

    def unsafe_is(self) -> bool:
        """
        Check whether extended features that call external renderers are allowed.

        Returns:
            True if mode is "unsafe"

        Example:
            >>> AppSettings(mode="unsafe").unsafe_is()
            True
        """
        return self.mode == "unsafe"


# Singleton instance - import this in your code
appsettings = AppSettings()
