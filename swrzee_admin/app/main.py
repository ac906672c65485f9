from __future__ import annotations

import argparse
import getpass
import json
import sys
from collections.abc import Sequence
from typing import Any

from swrzee_admin.app.bootstrap import DashboardBootstrap
from swrzee_admin.app.navigation import DashboardView
from swrzee_admin.app.ui.dialogs import MutationDialog
from swrzee_admin.app.ui.listing import SortOrder
from swrzee_admin.app.ui.table_printer import print_table
from swrzee_admin.app.ui.views.batches_view import BATCH_COLUMNS, BatchesView
from swrzee_admin.app.ui.views.overview_view import OverviewView
from swrzee_admin.app.ui.views.services_view import SERVICE_COLUMNS, ServicesView
from swrzee_admin.app.ui.views.users_view import USER_COLUMNS, UsersView
from swrzee_admin.sdk import ConfigError, load_config

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REDIRECT = 2

ACCOUNT_PROMPTS = [
    ("firstName", "first name: "),
    ("lastName", "last name: "),
    ("email", "email: "),
    ("phoneNumber", "phone number: "),
]


def _print_error(message: str | None, field_errors: dict[str, str] | None = None) -> None:
    payload: dict[str, Any] = {"error": message or "An error occurred"}
    if field_errors:
        payload["fields"] = field_errors
    print(json.dumps(payload, indent=2))


def _fill_account_form(dialog: MutationDialog, password: str | None = None) -> bool:
    values = {}
    for key, prompt in ACCOUNT_PROMPTS:
        values[key] = input(prompt).strip()
    if not values["firstName"]:
        return False
    values["password"] = password or getpass.getpass("password: ")
    dialog.update(**values)
    return True


def cmd_login(app: DashboardBootstrap, args: argparse.Namespace) -> int:
    view = app.login_view
    entry = view.open()
    if not entry.should_render:
        print(f"Already signed in. Redirect: {app.history.location}")
        return EXIT_REDIRECT

    password = args.password or getpass.getpass("password: ")
    outcome = view.submit(args.email, password)
    if not outcome.ok:
        _print_error(outcome.error)
        return EXIT_ERROR

    user = outcome.session.user if outcome.session else None
    print(f"Signed in as {user.display_name if user else args.email}")
    dialog = view.admin_dialog
    if dialog is None:
        print(f"Location: {app.history.location}")
        return EXIT_OK

    print("Super admin session: create an admin account (leave first name empty to skip).")
    if _fill_account_form(dialog) and not dialog.submit():
        _print_error(dialog.error, dialog.field_errors)
        view.close_admin_dialog()
        return EXIT_ERROR
    if not dialog.is_open:
        print("Admin account created.")
    view.close_admin_dialog()
    print(f"Location: {app.history.location}")
    return EXIT_OK


def cmd_logout(app: DashboardBootstrap, args: argparse.Namespace) -> int:
    location = app.login_view.logout()
    print(f"Signed out. Location: {location}")
    return EXIT_OK


def cmd_whoami(app: DashboardBootstrap, args: argparse.Namespace) -> int:
    decision = app.guard.require_session("whoami")
    if not decision.should_render:
        print(f"Not signed in. Redirect: {decision.redirect_to}")
        return EXIT_REDIRECT
    user = app.session.user
    if user is None:
        print("Signed in (no profile stored)")
        return EXIT_OK
    print(json.dumps({"name": user.display_name, "email": user.email, "role": user.role, "userId": user.user_id}, indent=2))
    return EXIT_OK


def cmd_register_super_admin(app: DashboardBootstrap, args: argparse.Namespace) -> int:
    dialog = app.login_view.open_super_admin_dialog()
    dialog.update(
        firstName=args.first_name,
        lastName=args.last_name,
        email=args.email,
        phoneNumber=args.phone_number,
        password=args.password or getpass.getpass("password: "),
    )
    if not dialog.submit():
        _print_error(dialog.error or "Please fix the validation errors below.", dialog.field_errors)
        return EXIT_ERROR
    app.login_view.close_super_admin_dialog()
    print("Super admin created.")
    return EXIT_OK


def _print_overview(view: OverviewView) -> None:
    summary = view.summary()
    print(f"Total users: {summary['total_users']}")
    print(f"Total revenue: {summary['total_revenue']}")
    for status, points in summary["series"].items():
        amounts = " ".join(f"{point['date']}:{point['amount']:g}" for point in points)
        print(f"{status}: {amounts}")
    print_table(
        "Recent payments",
        summary["recent_payments"],
        [("_id", "ID"), ("amount", "Amount"), ("status", "Status"), ("paymentMethod", "Method"), ("createdAt", "Created")],
    )


def _print_collection(title: str, view: UsersView | ServicesView | BatchesView, columns: list[tuple[str, str]]) -> None:
    projection = view.controller.projection
    rows = view.rows() if isinstance(view, (UsersView, BatchesView)) else projection.rows
    print_table(title, rows, columns)
    order = projection.sort_order.value if projection.sort_field else "-"
    print(
        f"Page {projection.page}/{max(1, projection.total_pages)} "
        f"({projection.filtered_count} matching, sort={projection.sort_field or '-'} {order})"
    )


def cmd_dashboard(app: DashboardBootstrap, args: argparse.Namespace) -> int:
    target = DashboardView.from_query(args.tab)
    decision, panel = app.open_dashboard(target)
    if panel is None:
        print(f"Session required. Redirect: {decision.redirect_to}")
        return EXIT_REDIRECT

    error = panel.error if isinstance(panel, OverviewView) else panel.controller.error
    if error:
        _print_error(error)
        return EXIT_ERROR

    if isinstance(panel, OverviewView):
        _print_overview(panel)
        return EXIT_OK

    controller = panel.controller
    if args.search:
        controller.set_search(args.search)
    if isinstance(panel, UsersView) and args.include_admins:
        panel.show_admins(True)
    sort_field = args.sort or controller.state.sort_field
    if sort_field:
        wanted = SortOrder.DESC if args.desc else SortOrder.ASC
        try:
            if sort_field != controller.state.sort_field:
                controller.toggle_sort(sort_field)
            if controller.state.sort_order is not wanted:
                controller.toggle_sort(sort_field)
        except ValueError as exc:
            _print_error(str(exc))
            return EXIT_ERROR
    if args.page:
        controller.set_page(args.page)

    if isinstance(panel, UsersView):
        stats = panel.stats
        print(
            f"Users: total={stats['total']} regular={stats['regular']} "
            f"admin={stats['admin']} superadmin={stats['superadmin']}"
        )
        _print_collection("Users", panel, USER_COLUMNS)
    elif isinstance(panel, ServicesView):
        _print_collection("Services", panel, SERVICE_COLUMNS)
    else:
        _print_collection(f"Batches ({panel.year})", panel, BATCH_COLUMNS)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swrzee-admin", description="Swrzee Enterprise admin dashboard")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password")
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami")
    whoami_parser.set_defaults(func=cmd_whoami)

    register_parser = subparsers.add_parser("register-super-admin")
    register_parser.add_argument("--first-name", required=True)
    register_parser.add_argument("--last-name", required=True)
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--phone-number", required=True)
    register_parser.add_argument("--password")
    register_parser.set_defaults(func=cmd_register_super_admin)

    dashboard_parser = subparsers.add_parser("dashboard")
    dashboard_parser.add_argument("--tab", choices=[view.value for view in DashboardView], default=None)
    dashboard_parser.add_argument("--search")
    dashboard_parser.add_argument("--sort")
    dashboard_parser.add_argument("--desc", action="store_true")
    dashboard_parser.add_argument("--page", type=int)
    dashboard_parser.add_argument("--include-admins", action="store_true")
    dashboard_parser.set_defaults(func=cmd_dashboard)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    app = DashboardBootstrap(config=config)
    try:
        return args.func(app, args)
    finally:
        app.close()


if __name__ == "__main__":
    raise SystemExit(main())
