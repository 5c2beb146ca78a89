from __future__ import annotations

from functools import wraps

from flask import flash, g, jsonify, redirect, render_template, request, session, url_for

from .model import PortalSession

SESSION_KEY = "portal"


def current_session() -> PortalSession:
    if "portal_session" not in g:
        g.portal_session = PortalSession.from_dict(session.get(SESSION_KEY))
    return g.portal_session


def store_session(portal: PortalSession, *, remember: bool = False) -> None:
    session.clear()
    session.permanent = bool(remember)
    session[SESSION_KEY] = portal.to_dict()
    g.portal_session = portal


def clear_session() -> None:
    session.clear()
    g.pop("portal_session", None)


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def _forbidden():
    if _wants_json():
        return jsonify({"success": False, "message": "You do not have permission to do that."}), 403
    portal = current_session()
    current_user = {"full_name": portal.display_name, "role": portal.role.value if portal.role else None}
    return render_template("403.html", current_user=current_user), 403


def _unauthenticated():
    if _wants_json():
        return jsonify({"success": False, "message": "Please sign in to continue."}), 401
    flash("Please sign in to continue.", "warning")
    return redirect(url_for("login"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_session().is_authenticated:
            return _unauthenticated()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        portal = current_session()
        if not portal.is_authenticated:
            return _unauthenticated()
        if not portal.is_admin:
            return _forbidden()
        return view(*args, **kwargs)

    return wrapper


def attendee_required(view):
    """Allow students and guests, the roles that check in."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        portal = current_session()
        if not portal.is_authenticated:
            return _unauthenticated()
        if not portal.can_check_in:
            return _forbidden()
        return view(*args, **kwargs)

    return wrapper
