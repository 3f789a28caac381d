"""Composer settings.

Labels and attribution templates are the "localizable" strings of the
composer. Defaults are the English ones; each can be overridden through a
``COMPOSER_*`` environment variable or a ``.env`` file.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_ATTACHMENT_SIZE = 25 * 1024 * 1024

DEFAULT_FORWARD_ATTRIBUTION = (
    "---------- Forwarded message ----------<br>"
    "From: {sender}<br>"
    "Date: {date}<br>"
    "Subject: {subject}<br>"
    "To: {to}<br>"
)

# Settings field -> environment variable
ENV_OVERRIDES = {
    "reply_subject_label": "COMPOSER_REPLY_SUBJECT_LABEL",
    "forward_subject_label": "COMPOSER_FORWARD_SUBJECT_LABEL",
    "formatted_subject": "COMPOSER_FORMATTED_SUBJECT",
    "reply_attribution": "COMPOSER_REPLY_ATTRIBUTION",
    "forward_attribution": "COMPOSER_FORWARD_ATTRIBUTION",
    "cc_attribution": "COMPOSER_CC_ATTRIBUTION",
    "max_attachment_size": "COMPOSER_MAX_ATTACHMENT_SIZE",
    "log_level": "COMPOSER_LOG_LEVEL",
}


class ComposerSettings(BaseModel):
    """Configuration for subject prefixes, attribution templates and limits.

    Args:
        reply_subject_label: Prefix for reply subjects.
        forward_subject_label: Prefix for forward subjects.
        formatted_subject: Template joining ``{prefix}`` and ``{subject}``.
        reply_attribution: Reply header template (``{date}``, ``{sender}``).
        forward_attribution: Forward header template (``{sender}``, ``{date}``,
            ``{subject}``, ``{to}``).
        cc_attribution: Forward Cc line template (``{cc}``).
        max_attachment_size: Maximum total attachment size in bytes.
        log_level: Root logging level used by the service.
    """

    model_config = {"frozen": True}

    reply_subject_label: str = Field(default="Re:", description="Reply subject prefix")
    forward_subject_label: str = Field(default="Fwd:", description="Forward subject prefix")
    formatted_subject: str = Field(
        default="{prefix} {subject}", description="Prefix + subject template"
    )
    reply_attribution: str = Field(
        default="On {date}, {sender} wrote:", description="Reply attribution template"
    )
    forward_attribution: str = Field(
        default=DEFAULT_FORWARD_ATTRIBUTION, description="Forward attribution template"
    )
    cc_attribution: str = Field(default="Cc: {cc}<br>", description="Forward Cc line template")
    max_attachment_size: int = Field(
        default=DEFAULT_MAX_ATTACHMENT_SIZE,
        gt=0,
        description="Maximum total attachment size in bytes",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the logging level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        level = value.upper()
        if level not in allowed:
            raise ValueError(f"Log level must be one of {sorted(allowed)}, got '{value}'")
        return level


def load_settings(env_file: Optional[str] = None) -> ComposerSettings:
    """Build settings from defaults, a .env file and the environment.

    Variables already present in the process environment win over the .env file.

    Args:
        env_file: Explicit .env path; searched for upward from the cwd when omitted.

    Returns:
        The resolved settings.
    """
    load_dotenv(dotenv_path=env_file)

    overrides = {}
    for field_name, env_name in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value is not None:
            overrides[field_name] = value

    return ComposerSettings(**overrides)
