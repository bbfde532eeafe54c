import argparse
import shlex
import sys

from .env import accepts_override, get_settings, load_env

from . import __version__
from .logger import get_logger
from .render import LOADING, render_error, render_more, render_table
from .state import DashboardController
from .storage import preferences_path

CONFIG_REQUIRED = (
    "Configuration Required: set DOCTRACKER_API_URL or pass "
    "--url https://script.google.com/macros/s/.../exec "
    "(deploy Code.gs as a Web App with access: Anyone)."
)

DASHBOARD_HELP = """Commands:
  list                 show candidates matching the current search
  search <term>        filter by name, email, designation or mobile
  clear                clear the search
  remind <#row>        send a reminder to a row of the current table
  remind <email>       send a reminder by email address
  remind-name <name>   send a reminder by candidate name
  more <name>          show documents beyond the first three
  reload               fetch candidates again
  url <endpoint>       switch to another Apps Script endpoint
  theme                toggle light/dark
  quit                 leave the dashboard"""


def _use_color() -> bool:
    return sys.stdout.isatty()


def build_controller(args: argparse.Namespace) -> DashboardController:
    settings = get_settings()
    get_logger(level=settings.log_level, log_dir=settings.log_dir)

    api_url = settings.api_url
    override = getattr(args, "url", None)
    if override:
        if accepts_override(override):
            api_url = override.strip()
        else:
            print(f"[warn] ignoring --url (not an Apps Script URL): {override}", file=sys.stderr)

    return DashboardController(
        api_url,
        preferences_file=preferences_path(settings.home),
        timeout=settings.timeout,
        on_toast=print,
    )


def load_candidates(controller: DashboardController) -> None:
    """Fetch candidates, exiting with the banner text on failure."""
    if not controller.is_configured:
        raise SystemExit(CONFIG_REQUIRED)
    print(LOADING)
    controller.start()
    if controller.error:
        raise SystemExit(controller.error)


def cmd_list(args: argparse.Namespace) -> None:
    controller = build_controller(args)
    load_candidates(controller)
    controller.set_search(args.search or "")
    print(render_table(controller.visible_candidates(), controller.theme.current, _use_color()))


def pick_candidate(controller: DashboardController, ref: str):
    """
    Resolve a reminder target typed by the operator.

    "3" or "#3" is a row of the current table, anything with "@" is an email
    (first match), and the rest is treated as a full name.
    Returns (candidate, message); message explains a failed lookup.
    """
    ref = (ref or "").strip()
    row = ref[1:] if ref.startswith("#") else ref
    if row.isdigit():
        candidate = controller.find_by_row(int(row))
        return candidate, None if candidate else f"No row {row} in the current table"
    if "@" in ref:
        candidate = controller.find_by_email(ref)
        return candidate, None if candidate else f"No candidate with email: {ref}"
    candidate = controller.find_by_name(ref)
    return candidate, None if candidate else f"No candidate named: {ref}"


def cmd_remind(args: argparse.Namespace) -> None:
    controller = build_controller(args)
    load_candidates(controller)
    controller.set_search(args.search or "")
    if args.row is not None:
        candidate = controller.find_by_row(args.row)
        problem = f"No row {args.row} in the current table"
    elif args.name:
        candidate = controller.find_by_name(args.name)
        problem = f"No candidate named: {args.name}"
    else:
        candidate = controller.find_by_email(args.email)
        problem = f"No candidate with email: {args.email}"
    if candidate is None:
        raise SystemExit(problem)
    if not candidate.can_remind:
        print(f"{candidate.name} has no missing documents. Nothing to send.")
        return
    result = controller.send_reminder(candidate)
    if not result.ok:
        raise SystemExit(1)


def cmd_more(args: argparse.Namespace) -> None:
    controller = build_controller(args)
    load_candidates(controller)
    candidate = controller.find_by_name(args.name)
    if candidate is None:
        raise SystemExit(f"No candidate named: {args.name}")
    if not controller.show_more(candidate):
        print(f"All missing documents for {candidate.name} are already shown.")
        return
    print(render_more(controller.modal.name, controller.modal.docs))


def cmd_theme(args: argparse.Namespace) -> None:
    settings = get_settings()
    controller = DashboardController(settings.api_url, preferences_file=preferences_path(settings.home))
    if args.toggle:
        controller.toggle_theme()
    print(f"Theme: {controller.theme.current}")


def _dashboard_command(controller: DashboardController, line: str) -> bool:
    """Run one dashboard command. Returns False when the session should end."""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        print(f"[error] {e}")
        return True
    if not parts:
        return True

    command, rest = parts[0].lower(), " ".join(parts[1:])
    color = _use_color()
    theme = controller.theme.current

    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        print(DASHBOARD_HELP)
    elif command == "list":
        print(render_table(controller.visible_candidates(), theme, color))
    elif command == "search":
        controller.set_search(rest)
        print(render_table(controller.visible_candidates(), theme, color))
    elif command == "clear":
        controller.set_search("")
        print(render_table(controller.visible_candidates(), theme, color))
    elif command in ("remind", "remind-name"):
        if command == "remind":
            candidate, problem = pick_candidate(controller, rest)
        else:
            candidate = controller.find_by_name(rest)
            problem = f"No candidate named: {rest}"
        if candidate is None:
            print(problem)
        elif not candidate.can_remind:
            print(f"{candidate.name} has no missing documents.")
        else:
            controller.send_reminder(candidate)
    elif command == "more":
        candidate = controller.find_by_name(rest)
        if candidate is None:
            print(f"No candidate named: {rest}")
        elif controller.show_more(candidate):
            print(render_more(controller.modal.name, controller.modal.docs))
            controller.close_modal()
        else:
            print(f"All missing documents for {candidate.name} are already shown.")
    elif command == "reload":
        _reload(controller)
    elif command == "url":
        if controller.configure(rest):
            _show_banner_or_table(controller)
        else:
            print("Endpoint must be a script.google.com web app URL.")
    elif command == "theme":
        print(f"Theme: {controller.toggle_theme()}")
    else:
        print(f"Unknown command: {command}. Type 'help' for commands.")
    return True


def _show_banner_or_table(controller: DashboardController) -> None:
    if controller.error:
        print(render_error(controller.error, controller.theme.current, _use_color()))
    else:
        print(render_table(controller.visible_candidates(), controller.theme.current, _use_color()))


def _reload(controller: DashboardController) -> None:
    if not controller.is_configured:
        print(CONFIG_REQUIRED)
        return
    print(LOADING)
    controller.reload()
    _show_banner_or_table(controller)


def cmd_dashboard(args: argparse.Namespace) -> None:
    controller = build_controller(args)
    _reload(controller)
    print("Type 'help' for commands.")
    while True:
        try:
            line = input("doctracker> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not _dashboard_command(controller, line):
            break
    get_logger().log_metrics_summary()


def main():
    # Load .env if present (DOCTRACKER_API_URL, DOCTRACKER_HOME, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="doctracker", description="Onboarding Document Tracker")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    lst = subparsers.add_parser("list", help="List candidates and their missing documents")
    lst.add_argument("--search", help="Filter by name, email, designation or mobile")
    lst.add_argument("--url", help="Apps Script web app URL (overrides DOCTRACKER_API_URL)")
    lst.set_defaults(func=cmd_list)

    rem = subparsers.add_parser("remind", help="Email a candidate about their missing documents")
    target = rem.add_mutually_exclusive_group(required=True)
    target.add_argument("--email", help="Candidate email address (first matching row)")
    target.add_argument("--name", help="Candidate full name")
    target.add_argument("--row", type=int, help="Row number from 'list' (with the same --search)")
    rem.add_argument("--search", help="Search used to number rows for --row")
    rem.add_argument("--url", help="Apps Script web app URL (overrides DOCTRACKER_API_URL)")
    rem.set_defaults(func=cmd_remind)

    mor = subparsers.add_parser("more", help="Show missing documents beyond the first three")
    mor.add_argument("--name", required=True, help="Candidate full name")
    mor.add_argument("--url", help="Apps Script web app URL (overrides DOCTRACKER_API_URL)")
    mor.set_defaults(func=cmd_more)

    thm = subparsers.add_parser("theme", help="Show or toggle the saved colour theme")
    thm.add_argument("--toggle", action="store_true", help="Switch between light and dark")
    thm.set_defaults(func=cmd_theme)

    dsh = subparsers.add_parser("dashboard", help="Interactive dashboard")
    dsh.add_argument("--url", help="Apps Script web app URL (overrides DOCTRACKER_API_URL)")
    dsh.set_defaults(func=cmd_dashboard)

    args = parser.parse_args()

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
