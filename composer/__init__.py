"""Reply and forward composition core.

This package contains the pure composition logic: resolving who a reply or
forward goes to, building the prefixed subject and quoted HTML body, and the
supporting records, settings, attachment bookkeeping and message lookup used
by the compose session and the HTTP API.
"""

from composer.actions import ComposeAction
from composer.config import ComposerSettings, load_settings
from composer.errors import (
    AttachmentTooLargeError,
    ComposerError,
    InvalidActionError,
    MalformedAddressError,
    ReferenceMessageUnavailable,
)
from composer.message import (
    AccountIdentity,
    AttachmentMetadata,
    ComposedContent,
    RecipientSets,
    ReferenceMessage,
)
from composer.quoting import QuoteComposer, compose_content
from composer.recipients import RecipientResolver, resolve_recipients
from composer.session import ComposeDraft, ComposeSession
from composer.store import InMemoryMessageStore, MessageStore

__all__ = [
    "ComposeAction",
    "ComposerSettings",
    "load_settings",
    "ComposerError",
    "InvalidActionError",
    "MalformedAddressError",
    "ReferenceMessageUnavailable",
    "AttachmentTooLargeError",
    "AccountIdentity",
    "AttachmentMetadata",
    "ComposedContent",
    "RecipientSets",
    "ReferenceMessage",
    "QuoteComposer",
    "compose_content",
    "RecipientResolver",
    "resolve_recipients",
    "ComposeDraft",
    "ComposeSession",
    "InMemoryMessageStore",
    "MessageStore",
]
