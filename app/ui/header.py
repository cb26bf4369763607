from html import escape
from typing import Callable
from urllib.parse import quote

from app.ui.session import SessionStore, UserSession

TITLE = "Community Overflow"
PROFILE_LABEL = "View Profile"
SIGN_OUT_LABEL = "Log Out"


class MissingUserContextError(RuntimeError):
    pass


class Header:
    """Top-of-page bar: app title, profile button and sign-out button.

    Holds no state of its own. Everything comes from the session, the
    ``navigate`` callable and the sign-out handler it is given.
    """

    def __init__(
        self,
        session: UserSession,
        navigate: Callable[[str], object],
        handle_sign_out: Callable[[], object],
    ):
        self.session = session
        self.navigate = navigate
        self.handle_sign_out = handle_sign_out

    def profile_path(self) -> str:
        user = self.session.current_user if self.session else None
        if user is None:
            raise MissingUserContextError("No current user in session")
        return f"/user/{quote(user.username, safe='')}"

    def click_profile(self):
        return self.navigate(self.profile_path())

    def click_sign_out(self):
        return self.handle_sign_out()

    def render(self) -> dict:
        return {
            "id": "header",
            "title": TITLE,
            "buttons": [
                {"ariaLabel": PROFILE_LABEL, "href": self.profile_path()},
                {"ariaLabel": SIGN_OUT_LABEL, "action": "sign-out"},
            ],
        }

    def render_html(self, sign_out_action: str = "/ui/header/sign-out") -> str:
        view = self.render()
        profile, _ = view["buttons"]
        return (
            '<div id="header" class="header">'
            f'<div class="title">{escape(view["title"])}</div>'
            '<div class="actions">'
            f'<a class="button" aria-label="{PROFILE_LABEL}" '
            f'href="{escape(profile["href"])}">Profile</a>'
            f'<form method="post" action="{escape(sign_out_action)}">'
            f'<button type="submit" aria-label="{SIGN_OUT_LABEL}">Sign out</button>'
            "</form>"
            "</div>"
            "</div>"
        )


def use_header(store: SessionStore, token: str, navigate: Callable[[str], object]):
    """Build the sign-out handler for ``token``: clear the session, then go home."""

    def handle_sign_out():
        store.close(token)
        return navigate("/")

    return handle_sign_out
