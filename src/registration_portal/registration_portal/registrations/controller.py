from __future__ import annotations

import logging

from flask import Flask, render_template, request

from ..auth.guards import admin_api_required, admin_page_required
from ..common.datetime_utils import date_stamp
from ..common.http import fail, json_body, ok, unexpected
from ..container import Container
from ..core.enums import AgeGroup, Emirate, ResidencePlace
from ..core.exceptions import DomainError
from .export import export_filename, registrations_to_csv

logger = logging.getLogger(__name__)


def _check_in_status(args):
    # `isCheckedIn=true|false` is accepted as a shorthand for `checkInStatus`.
    return args.get("checkInStatus") or args.get("isCheckedIn")


def register(app: Flask, container: Container) -> None:
    service = container.registration_service

    # ---- public --------------------------------------------------------------

    @app.route("/", methods=["GET"], endpoint="registration_form")
    def registration_form():
        return render_template(
            "index.html",
            event_name=app.config.get("EVENT_NAME"),
            age_groups=[a.value for a in AgeGroup],
            emirates=[e.value for e in Emirate],
            places=[p.value for p in ResidencePlace],
        )

    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def api_register():
        try:
            registration = service.create(json_body())
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Registration error")
            return unexpected("An unexpected error occurred. Please try again later.")

        return ok(
            registration.to_dict(),
            message=f"Registration successful! Thank you for registering for {app.config.get('EVENT_NAME')}.",
            status=201,
        )

    @app.route("/api/check-email", methods=["POST"], endpoint="api_check_email")
    def api_check_email():
        email = json_body().get("email")
        try:
            available = service.is_email_available(email)
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Email check error")
            return unexpected("Failed to check email availability")
        return ok({"isUnique": available, "email": email})

    # ---- admin pages ---------------------------------------------------------

    @app.route("/admin/dashboard", methods=["GET"], endpoint="admin_dashboard")
    @admin_page_required
    def admin_dashboard():
        return render_template("admin/dashboard.html", event_name=app.config.get("EVENT_NAME"))

    @app.route("/admin/checkin", methods=["GET"], endpoint="admin_checkin")
    @admin_page_required
    def admin_checkin():
        return render_template("admin/checkin.html", event_name=app.config.get("EVENT_NAME"))

    # ---- admin API -----------------------------------------------------------

    @app.route("/api/admin/registrations", methods=["GET"], endpoint="api_admin_registrations")
    @admin_api_required
    def api_admin_registrations():
        args = request.args
        try:
            if args.get("action") == "stats":
                return ok(container.stats_service.compute().to_dict())

            page = service.list(
                search=args.get("search"),
                page=args.get("page"),
                limit=args.get("limit"),
                sort_by=args.get("sortBy"),
                sort_order=args.get("sortOrder"),
                check_in_status=_check_in_status(args),
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Admin registrations error")
            return unexpected("Failed to fetch registrations. Please try again later.")
        return ok(page.to_dict())

    @app.route("/api/admin/registrations", methods=["PATCH"], endpoint="api_admin_update_checkin")
    @admin_api_required
    def api_admin_update_checkin():
        body = json_body()
        try:
            registration = service.set_check_in(
                body.get("id"),
                is_checked_in=body.get("isCheckedIn"),
                checked_in_adults=body.get("checkedInAdults"),
                checked_in_children=body.get("checkedInChildren"),
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Update check-in status error")
            return unexpected("Failed to update check-in status. Please try again later.")

        action = "checked in" if registration.is_checked_in else "checked out"
        return ok(registration.to_dict(), message=f"Registration {action} successfully.")

    @app.route("/api/admin/registrations", methods=["DELETE"], endpoint="api_admin_delete")
    @admin_api_required
    def api_admin_delete():
        try:
            registration = service.delete(request.args.get("id"))
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Delete registration error")
            return unexpected("Failed to delete registration. Please try again later.")
        return ok(message=f"Registration for {registration.name} has been deleted successfully.")

    @app.route("/api/admin/registrations/export", methods=["GET"], endpoint="api_admin_export")
    @admin_api_required
    def api_admin_export():
        args = request.args
        try:
            rows = service.list_for_export(
                search=args.get("search"),
                sort_by=args.get("sortBy"),
                sort_order=args.get("sortOrder"),
                check_in_status=_check_in_status(args),
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Export registrations error")
            return unexpected("Failed to export registrations. Please try again later.")

        filename = export_filename(app.config.get("EVENT_SLUG", "event"), date_stamp())
        return app.response_class(
            registrations_to_csv(rows),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/checkin", methods=["GET"], endpoint="api_admin_checkin_search")
    @admin_api_required
    def api_admin_checkin_search():
        try:
            matches = service.search_for_checkin(request.args.get("search"), limit=request.args.get("limit"))
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Check-in search error")
            return unexpected("Failed to search registrations")
        return ok([r.to_dict() for r in matches])

    @app.route("/api/admin/checkin", methods=["PATCH"], endpoint="api_admin_checkin")
    @admin_api_required
    def api_admin_checkin():
        body = json_body()
        try:
            registration = service.check_in(
                body.get("id"),
                checked_in_adults=body.get("checkedInAdults"),
                checked_in_children=body.get("checkedInChildren"),
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Check-in update error")
            return unexpected("Failed to update check-in status")

        return ok(
            registration.to_dict(),
            message=(
                f"{registration.name} checked in successfully with {registration.checked_in_adults} adults "
                f"and {registration.checked_in_children} children"
            ),
        )
