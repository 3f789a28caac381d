"""Compose endpoints.

Exposes recipient resolution, subject/quote composition and full draft
construction. The recipient and content endpoints are thin wrappers around
the pure core; the draft endpoint drives a throwaway ComposeSession.
"""

from fastapi import APIRouter
from pydantic import Field

from api.dependencies import MessageStoreDep, SettingsDep
from api.models import ComposeTimeMixin, ReferenceSourceRequest
from composer.actions import ComposeAction
from composer.message import (
    AccountIdentity,
    AttachmentMetadata,
    ComposedContent,
    RecipientSets,
)
from composer.quoting import QuoteComposer
from composer.recipients import RecipientResolver
from composer.session import ComposeDraft, ComposeSession

router = APIRouter(
    prefix="/compose",
    tags=["compose"],
)

_resolver = RecipientResolver()


# ============================================================================
# Request Models
# ============================================================================


class RecipientsRequest(ReferenceSourceRequest):
    """Request model for recipient resolution.

    Attributes:
        account: The replying account and its aliases.
    """

    account: AccountIdentity = Field(description="Replying account")


class ContentRequest(ReferenceSourceRequest, ComposeTimeMixin):
    """Request model for subject and quoted body composition."""


class DraftRequest(ReferenceSourceRequest, ComposeTimeMixin):
    """Request model for building a complete draft.

    Attributes:
        account: The composing account and its aliases.
        other_accounts: Further accounts offered as From for fresh messages.
        switch_to: Action to switch to after the draft is started.
        body: Text appended to the user's body.
        respond_inline: Whether to move the quoted text into the body.
        attachments: Attachments picked by the user.
    """

    account: AccountIdentity = Field(description="Composing account")
    other_accounts: list[str] = Field(
        default_factory=list, description="Other accounts available as From"
    )
    switch_to: ComposeAction | None = Field(
        default=None, description="Action to switch to after starting"
    )
    body: str = Field(default="", description="Text for the user's body")
    respond_inline: bool = Field(
        default=False, description="Move the quoted text into the body"
    )
    attachments: list[AttachmentMetadata] = Field(
        default_factory=list, description="Attachments picked by the user"
    )


# ============================================================================
# Route Handlers
# ============================================================================


@router.post("/recipients", response_model=RecipientSets)
async def resolve_recipients(
    request: RecipientsRequest, store: MessageStoreDep
) -> RecipientSets:
    """Resolve To/Cc/Bcc for a reply, reply-all or forward.

    Args:
        request: Action, account and reference message.
        store: The message store dependency.

    Returns:
        The resolved recipient sets.

    Raises:
        InvalidActionError: If the action is COMPOSE (400).
        ReferenceMessageUnavailable: If ``message_id`` is unknown (404).
    """
    reference = request.load_reference(store)
    return _resolver.resolve(
        request.action,
        request.account.primary_address,
        request.account.aliases,
        reference,
    )


@router.post("/content", response_model=ComposedContent)
async def compose_content(
    request: ContentRequest, store: MessageStoreDep, settings: SettingsDep
) -> ComposedContent:
    """Build the prefixed subject and quoted HTML body.

    Args:
        request: Action, reference message and optional clock override.
        store: The message store dependency.
        settings: The composer settings dependency.

    Returns:
        The composed subject and quoted body.

    Raises:
        ReferenceMessageUnavailable: If ``message_id`` is unknown (404).
    """
    reference = request.load_reference(store)
    return QuoteComposer(settings).compose(request.action, reference, request.now)


@router.post("/draft", response_model=ComposeDraft)
async def build_draft(
    request: DraftRequest, store: MessageStoreDep, settings: SettingsDep
) -> ComposeDraft:
    """Build everything a compose screen needs in one call.

    Unlike the other compose endpoints, an unknown ``message_id`` does not
    fail: the draft comes back empty with ``reference_available`` false.

    Args:
        request: Action, account, reference and the user's edits.
        store: The message store dependency.
        settings: The composer settings dependency.

    Returns:
        The resulting draft.

    Raises:
        InvalidActionError: If switching to COMPOSE with a reference (400).
        AttachmentTooLargeError: If a picked attachment does not fit (413).
    """
    session = ComposeSession(
        request.account,
        store=store,
        settings=settings,
        other_accounts=request.other_accounts,
    )
    draft = session.start(
        request.action,
        message_id=request.message_id,
        reference=request.reference_message,
        now=request.now,
    )

    if request.switch_to is not None:
        draft = session.switch_action(request.switch_to, now=request.now)
    for attachment in request.attachments:
        session.add_attachment(attachment)
    if request.body:
        session.append_to_body(request.body)
    if request.respond_inline:
        session.respond_inline()

    return session.draft or draft
