from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable
logger = logging.getLogger(__name__)


@dataclass
class Hint:
    """Structured hint for user guidance.

    Attributes:
        title: Short title describing the hint.
        message: Main explanatory message.
        tips: Optional list of short actionable tips.
        docs_url: Optional URL for documentation.
        code: Optional machine-readable code (e.g., "API_KEY_MISSING").
        context: Optional context tags (e.g., ["auth", "network"]).
    """

    title: str
    message: str
    tips: list[str] | None = None
    docs_url: str | None = None
    code: str | None = None
    context: list[str] | None = None


# Common, reusable hints
API_KEY_MISSING = Hint(
    title="API key required",
    message="Missing or invalid ALLSCREENSHOTS_API_KEY.",
    tips=[
        "Set ALLSCREENSHOTS_API_KEY in your environment or pass api_key=...",
        "Add it to ~/.allscreenshots/.env to use it across projects",
        "Check for whitespace or truncation",
    ],
    docs_url="https://allscreenshots.com/docs",
    code="API_KEY_MISSING",
    context=["auth", "config"],
)

RATE_LIMIT_HIT = Hint(
    title="Rate limit reached",
    message="Too many requests.",
    tips=[
        "Lower the number of concurrent captures",
        "Increase max_retries or the initial retry delay",
        "Check your plan limits with client.get_quota()",
    ],
    code="RATE_LIMIT",
    context=["network"],
)

QUOTA_EXCEEDED = Hint(
    title="Quota exceeded",
    message="Your screenshot quota for this period is used up.",
    tips=[
        "Check remaining quota with client.get_quota()",
        "Upgrade your plan or wait for the next period",
    ],
    docs_url="https://allscreenshots.com/pricing",
    code="QUOTA_EXCEEDED",
    context=["billing"],
)

INVALID_REQUEST = Hint(
    title="Invalid request",
    message="The request was rejected before it was sent.",
    tips=[
        "URLs must start with http:// or https://",
        "quality must be 1-100, delay 0-30000 ms, timeout 1000-60000 ms",
    ],
    code="INVALID_REQUEST",
    context=["validation"],
)

SERVICE_UNAVAILABLE = Hint(
    title="Service unavailable",
    message="The service kept failing with transient errors.",
    tips=[
        "Retry later",
        "Check your network connection",
        "Increase max_retries if failures are brief",
    ],
    code="SERVICE_UNAVAILABLE",
    context=["network"],
)


def render_hints(hints: Iterable[Hint] | None, *, design: Any | None = None) -> None:
    """Render a collection of hints on the SDK console.

    ``design`` overrides the console used for output (anything exposing
    ``warning``, ``info`` and ``link``).
    """
    if not hints:
        return

    console = design
    if console is None:
        from allscreenshots.utils import console as console_module  # lazy import

        console = console_module.shot_console

    for hint in hints:
        try:
            # Skip title if same as message
            if hint.title and hint.title != hint.message:
                console.warning(f"{hint.title}: {hint.message}")
            else:
                console.warning(hint.message)

            if hint.tips:
                for tip in hint.tips:
                    console.info(f"  - {tip}")

            if hint.docs_url:
                console.link(hint.docs_url)
        except Exception:
            logger.warning("Failed to render hint: %s", hint)
            continue
