# Rona Configuration Schema
# Pydantic model for YAML configuration validation

from pydantic import BaseModel, Field, field_validator

DEFAULT_EDITOR = "nano"


class RonaConfig(BaseModel):
    """Root configuration model for rona."""

    editor: str = Field(default=DEFAULT_EDITOR, description="Command used to edit commit_message.md")

    @field_validator("editor")
    @classmethod
    def strip_editor(cls, v: str) -> str:
        """Reject blank editor commands."""
        v = v.strip()
        if not v:
            raise ValueError("editor must not be empty")
        return v
