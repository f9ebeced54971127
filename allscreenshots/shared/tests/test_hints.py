from __future__ import annotations

from unittest.mock import MagicMock, patch

from allscreenshots.shared.hints import (
    API_KEY_MISSING,
    INVALID_REQUEST,
    QUOTA_EXCEEDED,
    RATE_LIMIT_HIT,
    SERVICE_UNAVAILABLE,
    Hint,
    render_hints,
)


def test_all_hint_constants():
    """Test that all predefined hint constants have required fields."""
    for hint in (API_KEY_MISSING, RATE_LIMIT_HIT, QUOTA_EXCEEDED, INVALID_REQUEST, SERVICE_UNAVAILABLE):
        assert hint.title
        assert hint.message
        assert hint.code
        assert hint.tips


def test_hint_minimal():
    """Test creating a minimal Hint with only required fields."""
    hint = Hint(title="Minimal", message="Just basics")

    assert hint.tips is None
    assert hint.docs_url is None
    assert hint.code is None
    assert hint.context is None


def test_render_hints_none():
    render_hints(None)
    render_hints([])


@patch("allscreenshots.utils.console.shot_console")
def test_render_hints_with_tips(mock_console):
    render_hints([API_KEY_MISSING])

    mock_console.warning.assert_called_once_with("API key required: Missing or invalid ALLSCREENSHOTS_API_KEY.")
    assert mock_console.info.call_count == len(API_KEY_MISSING.tips)
    mock_console.link.assert_called_once_with(API_KEY_MISSING.docs_url)


@patch("allscreenshots.utils.console.shot_console")
def test_render_hints_same_title_and_message(mock_console):
    """Only the message is shown when title and message are equal."""
    render_hints([Hint(title="Same", message="Same")])

    mock_console.warning.assert_called_once_with("Same")
    mock_console.link.assert_not_called()


def test_render_hints_with_custom_design():
    custom_design = MagicMock()

    render_hints([Hint(title="Test", message="Message", tips=["one"])], design=custom_design)

    custom_design.warning.assert_called_once_with("Test: Message")
    custom_design.info.assert_called_once_with("  - one")


@patch("allscreenshots.utils.console.shot_console")
def test_render_hints_handles_exception(mock_console):
    """A failing hint is logged and the remaining hints still render."""
    mock_console.warning.side_effect = [Exception("Test error"), None]

    render_hints([Hint(title="A", message="first"), Hint(title="B", message="second")])

    assert mock_console.warning.call_count == 2
