"""Shared test fixtures for feedmail."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from feedmail.core.config import ExtractionConfig
from feedmail.core.types import RawEmailRecord


@pytest.fixture
def config() -> ExtractionConfig:
    """Default configuration, isolated from any local .env file."""
    return ExtractionConfig(_env_file=None)


@pytest.fixture
def group_post_html() -> str:
    """Notification body with a marked post message, media and links."""
    return """
    <html>
      <head><title>Facebook</title><style>.x { color: red; }</style></head>
      <body>
        <table>
          <tr><td class="author">Jane Doe</td></tr>
          <tr><td>
            <div data-testid="post_message">Just finished reading this amazing novel!</div>
          </td></tr>
          <tr><td>
            <img src="https://scontent.example.com/photos/novel.jpg" alt="Book cover">
            <img src="https://www.facebook.com/tr/?id=123&ev=open" alt="">
            <a href="https://www.facebook.com/groups/bookclub/posts/1">View post</a>
            <a href="https://www.facebook.com/help/notifications">Help</a>
            <a href="https://www.facebook.com/unsubscribe?u=1">Unsubscribe</a>
          </td></tr>
        </table>
      </body>
    </html>
    """


@pytest.fixture
def sample_email(group_post_html: str) -> RawEmailRecord:
    """Notification email for a group post."""
    return RawEmailRecord(
        identifier="<msg-1@facebookmail.com>",
        subject="Jane Doe posted in Book Club group",
        sender="Facebook <notification@facebookmail.com>",
        body=group_post_html,
        timestamp="Mon, 1 Jan 2024 10:00:00 +0000",
    )


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo structlog configuration done by a test (e.g. CLI runs)."""
    yield
    structlog.reset_defaults()
