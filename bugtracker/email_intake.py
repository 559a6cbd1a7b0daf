"""
Email intake.

Maps an RFC 822 message onto a WorkItem:

    * Subject: => title
    * Body     => content (text/plain preferred, HTML otherwise)
    * Delivered-To / X-Original-To / To: => metadata["recipient"]
    * From:    => metadata["sender"]
"""

from email import message_from_bytes, policy
from email.message import EmailMessage, Message
from email.utils import getaddresses

from bugtracker.workitem.resolver import RECIPIENT_KEY
from bugtracker.workitem.types import WorkItem

# Envelope headers first: the To: header may list several addresses or a
# mailing list while the delivery headers name the mailbox that received it.
RECIPIENT_HEADERS = ("Delivered-To", "X-Original-To", "To")


def first_address(message: Message, headers=RECIPIENT_HEADERS) -> str | None:
    """Return the first bare address found in the given headers."""
    for header in headers:
        values = message.get_all(header) or []
        for _, address in getaddresses([str(v) for v in values]):
            if address:
                return address
    return None


def message_body(message: Message) -> str:
    """Extract the readable body of a message."""
    if isinstance(message, EmailMessage):
        part = message.get_body(preferencelist=("plain", "html"))
        if part is None:
            return ""
        return part.get_content().strip()

    # compat32 messages (e.g. from email.message_from_string without a policy)
    for part in message.walk():
        if part.get_content_type() in ("text/plain", "text/html"):
            payload = part.get_payload(decode=True) or b""
            charset = part.get_content_charset() or "utf-8"
            return payload.decode(charset, errors="replace").strip()
    return ""


def work_item_from_message(message: Message) -> WorkItem:
    """Build a WorkItem from a parsed email message."""
    metadata = {}

    recipient = first_address(message)
    if recipient:
        metadata[RECIPIENT_KEY] = recipient

    sender = first_address(message, ("From",))
    if sender:
        metadata["sender"] = sender

    if message.get("Message-ID"):
        metadata["message_id"] = str(message["Message-ID"]).strip()

    return WorkItem(
        title=str(message.get("Subject", "")).strip(),
        content=message_body(message),
        metadata=metadata or None,
    )


def work_item_from_bytes(raw: bytes) -> WorkItem:
    """Parse raw message bytes (e.g. an .eml file) into a WorkItem."""
    return work_item_from_message(message_from_bytes(raw, policy=policy.default))
