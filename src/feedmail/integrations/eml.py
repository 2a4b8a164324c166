"""RFC 2822 (.eml) loader producing raw email records."""

from __future__ import annotations

from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path

from feedmail.core.types import RawEmailRecord


class EmlLoadError(Exception):
    """Exception raised when an .eml file cannot be loaded.

    Attributes:
        reason: Human-readable error description.
        path: File that failed to load, if known.
    """

    def __init__(self, reason: str, path: Path | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.path = path


def _body_text(message: EmailMessage) -> str:
    """Return the HTML body if present, else the plain-text body."""
    part = message.get_body(preferencelist=("html", "plain"))
    if part is None:
        return ""
    try:
        content = part.get_content()
    except (LookupError, UnicodeDecodeError):
        payload = part.get_payload(decode=True)
        if not isinstance(payload, bytes):
            return ""
        return payload.decode("utf-8", errors="replace")
    return content if isinstance(content, str) else ""


def parse_eml(data: bytes) -> RawEmailRecord:
    """Parse raw .eml bytes into a RawEmailRecord.

    Args:
        data: Full message bytes, headers included.

    Returns:
        RawEmailRecord with decoded subject, sender, date and body.

    Raises:
        EmlLoadError: If the bytes are not a parsable message.
    """
    try:
        message = BytesParser(policy=policy.default).parsebytes(data)
    except Exception as e:
        raise EmlLoadError(f"Unparsable message: {e}") from e

    if not isinstance(message, EmailMessage):
        raise EmlLoadError("Unexpected message type")

    return RawEmailRecord(
        identifier=str(message.get("Message-ID", "") or "").strip(),
        subject=str(message.get("Subject", "") or ""),
        sender=str(message.get("From", "") or ""),
        body=_body_text(message),
        timestamp=str(message.get("Date", "") or ""),
    )


def load_eml(path: str | Path) -> RawEmailRecord:
    """Read and parse an .eml file.

    Args:
        path: Path to the message file.

    Returns:
        RawEmailRecord for the message.

    Raises:
        EmlLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise EmlLoadError(f"Cannot read {path}: {e}", path=path) from e

    try:
        return parse_eml(data)
    except EmlLoadError as e:
        raise EmlLoadError(e.reason, path=path) from e
