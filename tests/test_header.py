"""Header component: profile navigation and sign-out."""
from unittest.mock import Mock

import pytest

from app.models.user_models import SafeUser
from app.ui.header import TITLE, Header, MissingUserContextError, use_header
from app.ui.session import SessionStore, UserSession


def _session(username: str = "alice") -> UserSession:
    return UserSession(token="t", current_user=SafeUser(id="u1", username=username))


def test_profile_click_navigates_to_user_page() -> None:
    navigate = Mock()
    header = Header(_session("alice"), navigate, Mock())
    header.click_profile()
    navigate.assert_called_once_with("/user/alice")


def test_sign_out_called_once_per_click() -> None:
    sign_out = Mock()
    header = Header(_session(), Mock(), sign_out)
    header.click_sign_out()
    assert sign_out.call_count == 1
    header.click_sign_out()
    assert sign_out.call_count == 2


def test_render_contains_title_and_buttons() -> None:
    view = Header(_session("alice"), Mock(), Mock()).render()
    assert view["title"] == TITLE == "Community Overflow"
    labels = [b["ariaLabel"] for b in view["buttons"]]
    assert labels == ["View Profile", "Log Out"]
    assert view["buttons"][0]["href"] == "/user/alice"


def test_render_html_escapes_username() -> None:
    html = Header(_session("<b>"), Mock(), Mock()).render_html()
    assert "<b>" not in html.split("Community Overflow")[1]
    assert 'aria-label="Log Out"' in html


def test_missing_user_is_not_papered_over() -> None:
    navigate = Mock()
    header = Header(UserSession(), navigate, Mock())
    with pytest.raises(MissingUserContextError):
        header.click_profile()
    navigate.assert_not_called()


def test_use_header_clears_session_and_goes_home() -> None:
    store = SessionStore()
    session = store.open(SafeUser(id="u1", username="alice"))
    navigate = Mock(return_value="redirect")

    handle_sign_out = use_header(store, session.token, navigate)
    assert handle_sign_out() == "redirect"

    navigate.assert_called_once_with("/")
    assert store.get(session.token).current_user is None
