"""
Configuration data models for harbomux.

These models define the structure of ~/.config/harbomux/config.json, with
validation via Pydantic.
"""

from pydantic import BaseModel, Field, field_validator

from harbomux.core.tmux import DEFAULT_SERVER_LABEL


class HarbomuxConfig(BaseModel):
    """
    Top-level harbomux configuration.

    The sentinel variables (HARBOMUX, TMUX) are protocol state, not
    configuration, and have no fields here.
    """

    server_label: str = Field(
        default=DEFAULT_SERVER_LABEL,
        min_length=1,
        description="Socket name of the managed tmux server (tmux -L)",
    )
    tmux_binary: str = Field(
        default="tmux",
        min_length=1,
        description="tmux executable to invoke",
    )
    session_name: str | None = Field(
        default=None,
        description="Name for the managed session (tmux picks one if unset)",
    )
    setup_commands: list[str] = Field(
        default_factory=list,
        description="Shell commands run once inside a freshly created session",
    )
    dev_mode: bool = Field(
        default=False,
        description="Re-invoke harbomux through 'uv run' (development checkouts)",
    )

    @field_validator("server_label")
    @classmethod
    def validate_server_label(cls, v: str) -> str:
        """Reject blank labels and labels tmux would misread."""
        v = v.strip()
        if not v:
            raise ValueError("server_label must not be blank")
        if "/" in v or any(c.isspace() for c in v):
            raise ValueError("server_label must not contain '/' or whitespace")
        return v
