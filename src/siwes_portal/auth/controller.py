from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError, ExternalServiceError, ValidationError
from ..session.guards import clear_session, current_session, store_session
from .model import SignInResult

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    router = container.session_router
    login_service = container.login_service

    def _enter(result: SignInResult, *, remember: bool = False):
        resolving = router.begin(result.identity)
        portal = router.complete(resolving, result.profile)
        store_session(portal, remember=remember)
        flash(f"Welcome, {portal.display_name}!", "success")
        return redirect(url_for(router.target_endpoint(portal)))

    def _system_error(action: str, e: Exception) -> None:
        logger.exception("Unexpected error during %s", action)
        if bool(app.config.get("DEBUG", False)):
            flash(f"System error during {action}: {e}", "danger")
        else:
            flash(f"System error during {action}", "danger")

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for(router.target_endpoint(current_session())))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        portal = current_session()
        if portal.is_authenticated:
            return redirect(url_for(router.target_endpoint(portal)))

        mode = request.form.get("mode") or request.args.get("mode") or "student"

        if request.method == "POST":
            remember = bool(request.form.get("remember_me"))
            try:
                if mode == "admin":
                    result = login_service.admin_sign_in(
                        request.form.get("email", ""), request.form.get("password", "")
                    )
                elif mode == "guest":
                    result = login_service.guest_sign_in()
                else:
                    result = login_service.student_sign_in(
                        request.form.get("student_id", ""), request.form.get("password", "")
                    )
                return _enter(result, remember=remember)
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except ExternalServiceError as e:
                logger.warning("Sign-in rejected by the store: %s", e)
                flash(str(e), "danger")
            except Exception as e:
                _system_error("sign-in", e)

        return render_template("login.html", mode=mode)

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_view():
        portal = current_session()
        if portal.is_authenticated:
            return redirect(url_for(router.target_endpoint(portal)))

        form = {}
        if request.method == "POST":
            form = request.form.to_dict()
            form.pop("password", None)
            form.pop("confirm_password", None)
            try:
                result = login_service.register(
                    first_name=request.form.get("first_name", ""),
                    last_name=request.form.get("last_name", ""),
                    login=request.form.get("login", ""),
                    password=request.form.get("password", ""),
                    confirm_password=request.form.get("confirm_password", ""),
                )
                return _enter(result)
            except DomainError as e:
                flash(str(e), "danger")
            except Exception as e:
                _system_error("registration", e)

        return render_template("register.html", form=form)

    @app.route("/auth/oauth/<provider>", endpoint="oauth_login")
    def oauth_login(provider: str):
        try:
            return _enter(login_service.oauth_sign_in(provider))
        except DomainError as e:
            flash(str(e), "danger")
        except Exception as e:
            _system_error("sign-in", e)
        return redirect(url_for("login"))

    @app.route("/logout", endpoint="logout")
    def logout():
        portal = current_session()
        router.sign_out(portal)
        clear_session()
        if portal.is_authenticated:
            logger.info("User %s signed out", portal.user_id)
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))
