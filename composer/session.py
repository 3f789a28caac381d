"""A compose session: everything a compose screen needs, minus the screen."""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from composer.actions import ComposeAction, coerce_action
from composer.attachments import AttachmentList
from composer.config import ComposerSettings
from composer.errors import InvalidActionError, ReferenceMessageUnavailable
from composer.message import (
    AccountIdentity,
    AttachmentMetadata,
    ComposedContent,
    RecipientSets,
    ReferenceMessage,
)
from composer.quoting import QuoteComposer
from composer.recipients import RecipientResolver
from composer.reply_from import (
    ReplyFromAccount,
    build_reply_from_accounts,
    select_reply_from_index,
)
from composer.store import MessageStore

logger = logging.getLogger(__name__)


class ComposeDraft(BaseModel):
    """Snapshot of what the compose screen should show.

    Args:
        action: The current compose action.
        recipients: Prefilled To/Cc/Bcc.
        subject: Prefilled subject.
        quoted_body_html: Quoted text shown below the user's body.
        quoted_text_allowed: Whether the user may toggle the quoted text off
            (never for forwards, where the quote is the point).
        body: The user's own body text.
        attachments: Attachments carried by the draft.
        reply_from_accounts: Addresses the user may send from.
        reply_from_index: Preselected entry of reply_from_accounts.
        reference_available: Whether the reference message could be loaded.
    """

    action: ComposeAction = Field(description="Current compose action")
    recipients: RecipientSets = Field(default_factory=RecipientSets)
    subject: str = Field(default="")
    quoted_body_html: str = Field(default="")
    quoted_text_allowed: bool = Field(default=False)
    body: str = Field(default="")
    attachments: list[AttachmentMetadata] = Field(default_factory=list)
    reply_from_accounts: list[ReplyFromAccount] = Field(default_factory=list)
    reply_from_index: int = Field(default=0)
    reference_available: bool = Field(default=False)


class ComposeSession:
    """Drives one composition from start to the user's edits.

    The session is per-user mutable state and is not meant to be shared
    between threads; the resolver and quote composer it uses are stateless.

    Args:
        identity: The account composing the message.
        store: Where reference messages are looked up by identifier.
        settings: Labels, templates and limits.
        other_accounts: Further accounts offered as From for fresh messages.
    """

    def __init__(
        self,
        identity: AccountIdentity,
        store: Optional[MessageStore] = None,
        settings: Optional[ComposerSettings] = None,
        other_accounts: Optional[list[str]] = None,
    ) -> None:
        self.identity = identity
        self.store = store
        self.settings = settings or ComposerSettings()
        self.other_accounts = other_accounts or []

        self.resolver = RecipientResolver()
        self.quote_composer = QuoteComposer(self.settings)
        self.attachments = AttachmentList(self.settings.max_attachment_size)

        self.action = ComposeAction.COMPOSE
        self.reference: Optional[ReferenceMessage] = None
        self.body = ""
        self.draft: Optional[ComposeDraft] = None
        self._user_attachments: list[AttachmentMetadata] = []

    def start(
        self,
        action: ComposeAction,
        message_id: Optional[str] = None,
        reference: Optional[ReferenceMessage] = None,
        now: Optional[datetime] = None,
    ) -> ComposeDraft:
        """Begin a composition.

        The reference message is taken from ``reference`` when given,
        otherwise looked up in the store by ``message_id``. A reference that
        cannot be found yields an empty draft instead of an error.

        Args:
            action: What is being composed.
            message_id: Store identifier of the reference message.
            reference: The reference message itself.
            now: Current time for attribution dates.

        Returns:
            The initial draft.

        Raises:
            InvalidActionError: If the action is unknown.
        """
        action = coerce_action(action, "composition")

        self.action = action
        self.body = ""
        self._user_attachments = []
        if action.uses_reference:
            self.reference = reference if reference is not None else self._lookup(message_id)
        else:
            self.reference = None

        logger.info(
            f"Starting {action.value} for {self.identity.primary_address} "
            f"(reference available: {self.reference is not None})"
        )
        return self._rebuild(now)

    def switch_action(
        self, action: ComposeAction, now: Optional[datetime] = None
    ) -> ComposeDraft:
        """Switch between reply, reply-all and forward on the same reference.

        Recipients, subject, quoted text and attachments are recomputed; the
        user's body is kept. Switching to the current action is a no-op.

        Raises:
            InvalidActionError: If the action is unknown, or COMPOSE while a
                reference message is loaded.
        """
        action = coerce_action(action, "composition")
        if self.draft is not None and action is self.action:
            return self.draft
        if action is ComposeAction.COMPOSE and self.reference is not None:
            raise InvalidActionError(action, "switching a reply or forward")

        logger.info(f"Switching compose action {self.action.value} -> {action.value}")
        self.action = action
        return self._rebuild(now)

    def append_to_body(self, text: str) -> str:
        """Append text to the user's body, or set it when the body is empty.

        Returns:
            The new body.
        """
        if self.body:
            self.body += text
        else:
            self.body = text
        self._refresh(body=self.body)
        return self.body

    def respond_inline(self) -> str:
        """Move the quoted text into the user's body for inline answering.

        Returns:
            The new body.
        """
        quoted = self.draft.quoted_body_html if self.draft is not None else ""
        return self.append_to_body(quoted)

    def add_attachment(self, attachment: AttachmentMetadata) -> int:
        """Attach a file picked by the user.

        Returns:
            The attachment's size in bytes.

        Raises:
            AttachmentTooLargeError: If the attachment does not fit.
        """
        size = self.attachments.add(attachment)
        self._user_attachments.append(attachment)
        self._refresh(attachments=self.attachments.to_list())
        return size

    def _lookup(self, message_id: Optional[str]) -> Optional[ReferenceMessage]:
        if message_id is None or self.store is None:
            return None
        try:
            return self.store.get(message_id)
        except ReferenceMessageUnavailable as exc:
            logger.warning(f"{exc.message}; composing without a reference")
            return None

    def _rebuild(self, now: Optional[datetime]) -> ComposeDraft:
        action = self.action
        reference = self.reference

        if action is ComposeAction.COMPOSE or reference is None:
            recipients = RecipientSets()
            content = ComposedContent()
        else:
            recipients = self.resolver.resolve(
                action,
                self.identity.primary_address,
                self.identity.aliases,
                reference,
            )
            content = self.quote_composer.compose(action, reference, now)

        # User attachments first; forwarded ones take the room that is left.
        self.attachments.clear()
        self.attachments.extend_fitting(self._user_attachments)
        if action is ComposeAction.FORWARD and reference is not None:
            self.attachments.extend_fitting(reference.attachments)

        reply_from_accounts = build_reply_from_accounts(
            self.identity,
            self.other_accounts,
            is_reply_or_forward=reference is not None,
        )

        self.draft = ComposeDraft(
            action=action,
            recipients=recipients,
            subject=content.subject,
            quoted_body_html=content.quoted_body_html,
            quoted_text_allowed=action.is_reply and reference is not None,
            body=self.body,
            attachments=self.attachments.to_list(),
            reply_from_accounts=reply_from_accounts,
            reply_from_index=select_reply_from_index(
                reply_from_accounts, self.identity.primary_address
            ),
            reference_available=reference is not None,
        )
        return self.draft

    def _refresh(self, **changes) -> None:
        if self.draft is not None:
            self.draft = self.draft.model_copy(update=changes)
