from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from app.ui.header import Header, MissingUserContextError, use_header
from app.ui.session import session_store

router = APIRouter(prefix="/ui", tags=["UI"])


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(path, status_code=303)


def _header(token: str | None) -> Header:
    session = session_store.get(token)
    return Header(session, _redirect, use_header(session_store, session.token, _redirect))


@router.get("/header", response_class=HTMLResponse)
async def render_header(token: str | None = None):
    try:
        return _header(token).render_html(sign_out_action=f"/ui/header/sign-out?token={token}")
    except MissingUserContextError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/header/profile")
async def header_profile(token: str | None = None):
    try:
        return _header(token).click_profile()
    except MissingUserContextError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.post("/header/sign-out")
async def header_sign_out(token: str | None = None):
    return _header(token).click_sign_out()
