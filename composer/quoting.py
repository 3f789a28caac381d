"""Subject prefixing and quoted-body synthesis.

The HTML produced here must stay in sync with the quote styling used by the
mail renderers, so every tag, attribute and separator below is part of a
versioned contract. Bump QUOTE_FORMAT_VERSION whenever the output changes.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from composer.actions import ComposeAction, coerce_action
from composer.addresses import clean_up_string, join_addresses
from composer.config import ComposerSettings
from composer.message import ComposedContent, ReferenceMessage

logger = logging.getLogger(__name__)

QUOTE_FORMAT_VERSION = 1

# Outer wrapper for quoted replies and forwards
QUOTE_BEGIN = '<div class="quote">'
QUOTE_END = "</div>"
# Indented wrapper around the original body of a reply
BLOCKQUOTE_BEGIN = (
    '<blockquote class="quote" style="'
    "margin:0 0 0 .8ex;"
    "border-left:1px #ccc solid;"
    'padding-left:1ex">'
)
BLOCKQUOTE_END = "</blockquote>"
# Separates the attribution header from the quoted body
HEADER_SEPARATOR = "<br type='attribution'>"


def format_attribution_date(value: datetime) -> str:
    """Format a timestamp as medium date plus short time.

    Example: ``Jan 5, 2026, 3:04 PM``.
    """
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {value.year}, {hour}:{value:%M} {value:%p}"


class QuoteComposer:
    """Builds the subject line and quoted HTML body for a compose action.

    Args:
        settings: Labels and templates to use; defaults to ComposerSettings().
    """

    def __init__(self, settings: Optional[ComposerSettings] = None) -> None:
        self.settings = settings or ComposerSettings()

    def compose(
        self,
        action: ComposeAction,
        ref_message: Optional[ReferenceMessage],
        now: Optional[datetime] = None,
    ) -> ComposedContent:
        """Compose subject and quoted body for an action.

        Args:
            action: The compose action.
            ref_message: The message being answered, or None if unavailable.
            now: Current time; used when the reference has no receive date and
                as the timezone the attribution date is shown in.

        Returns:
            The composed content. Empty when the reference is missing.

        Raises:
            InvalidActionError: If the action is unknown.
        """
        action = coerce_action(action, "quote composition")

        if ref_message is None:
            logger.info(f"No reference message for {action.value}; nothing to quote")
            return ComposedContent()

        now = now or datetime.now(timezone.utc)
        return ComposedContent(
            subject=self.build_subject(action, ref_message.subject),
            quoted_body_html=self.build_quoted_body(action, ref_message, now),
        )

    def subject_prefix(self, action: ComposeAction) -> str:
        """Return the subject prefix for an action ("" for COMPOSE)."""
        prefixes = {
            ComposeAction.COMPOSE: "",
            ComposeAction.REPLY: self.settings.reply_subject_label,
            ComposeAction.REPLY_ALL: self.settings.reply_subject_label,
            ComposeAction.FORWARD: self.settings.forward_subject_label,
        }
        return prefixes[coerce_action(action, "quote composition")]

    def build_subject(self, action: ComposeAction, subject: Optional[str]) -> str:
        """Apply the action's prefix unless the subject already carries it.

        Args:
            action: The compose action.
            subject: The reference message's subject.

        Returns:
            The subject to prefill.
        """
        subject = subject or ""
        prefix = self.subject_prefix(action)
        if subject.lower().startswith(prefix.lower()):
            return subject
        return self.settings.formatted_subject.format(prefix=prefix, subject=subject)

    def build_quoted_body(
        self, action: ComposeAction, ref_message: ReferenceMessage, now: datetime
    ) -> str:
        """Build the quoted HTML fragment for an action.

        Args:
            action: The compose action.
            ref_message: The message being answered.
            now: Current time.

        Returns:
            One well-formed fragment with a single attribution header, a
            single separator and one copy of the original body. Empty for
            COMPOSE.
        """
        builders = {
            ComposeAction.COMPOSE: lambda message, date: "",
            ComposeAction.REPLY: self._reply_body,
            ComposeAction.REPLY_ALL: self._reply_body,
            ComposeAction.FORWARD: self._forward_body,
        }
        builder = builders[coerce_action(action, "quote composition")]
        return builder(ref_message, _attribution_date(ref_message, now))

    def _reply_body(self, ref_message: ReferenceMessage, date: str) -> str:
        attribution = self.settings.reply_attribution.format(
            date=date,
            sender=clean_up_string(ref_message.from_address),
        )
        return "".join(
            [
                QUOTE_BEGIN,
                attribution,
                HEADER_SEPARATOR,
                BLOCKQUOTE_BEGIN,
                ref_message.body_html,
                BLOCKQUOTE_END,
                QUOTE_END,
            ]
        )

    def _forward_body(self, ref_message: ReferenceMessage, date: str) -> str:
        attribution = self.settings.forward_attribution.format(
            sender=clean_up_string(ref_message.from_address),
            date=date,
            subject=clean_up_string(ref_message.subject, address=False),
            to=clean_up_string(join_addresses(ref_message.to_addresses)),
        )
        # The Cc line is informational and emitted even when there is no Cc.
        cc_line = self.settings.cc_attribution.format(
            cc=clean_up_string(join_addresses(ref_message.cc_addresses)),
        )
        return "".join(
            [
                QUOTE_BEGIN,
                attribution,
                cc_line,
                HEADER_SEPARATOR,
                ref_message.body_html,
                QUOTE_END,
            ]
        )


def compose_content(
    action: ComposeAction,
    ref_message: Optional[ReferenceMessage],
    now: Optional[datetime] = None,
    settings: Optional[ComposerSettings] = None,
) -> ComposedContent:
    """Compose subject and quoted body with a throwaway QuoteComposer."""
    return QuoteComposer(settings).compose(action, ref_message, now)


def _attribution_date(ref_message: ReferenceMessage, now: datetime) -> str:
    date = ref_message.date_received or now
    if date.tzinfo is not None and now.tzinfo is not None:
        date = date.astimezone(now.tzinfo)
    return format_attribution_date(date)
