"""Command-line argument parsing for koban."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

from koban.config_store import DEFAULT_BASE_URL
from koban.endpoints import HttpMethod
from koban.invoice import InvoiceTriggers, WriteSafety
from koban.options import (
    MAX_PER_PAGE,
    CompletionShell,
    ListOptions,
    OutputFormat,
    SkillTarget,
)

_MAIN_EPILOG = f"""\
Examples:
  koban statics --output json
  koban clients list --page 1 --per-page 20
  koban products create --name Consulting --price 100 --dry-run
  koban invoices update <invoice_id> --data-file invoice.json --dry-run
  koban search run --field query=acme --dry-run
  koban update --check

Environment:
  INVOICE_NINJA_API_TOKEN  Required API token
  INVOICE_NINJA_BASE_URL   Optional API base URL, defaults to {DEFAULT_BASE_URL}"""

_UPDATE_EPILOG = """\
Upgrade koban in place when installed from a release archive. The latest tag
is resolved by following the releases/latest redirect, so no anonymous API
rate limits apply. Use --nightly to install the rolling nightly build."""

_COMPLETIONS_EPILOG = """\
Setup examples:

  zsh:
    source <(koban completions zsh)

  bash:
    source <(koban completions bash)

  fish:
    koban completions fish | source

  nushell:
    koban completions nushell | save ~/.config/nushell/completions/koban.nu"""

_RESOURCE_COMMANDS = (
    ("clients", "List, show, and inspect clients"),
    ("payments", "List, show, and inspect payments"),
    ("quotes", "List, show, and inspect quotes"),
    ("credits", "List, show, and inspect credits"),
    ("vendors", "List, show, and inspect vendors"),
    ("expenses", "List, show, and inspect expenses"),
    ("projects", "List, show, and inspect projects"),
    ("tasks", "List, show, and inspect tasks"),
    ("locations", "List, show, and manage locations"),
    ("products", "List, show, and manage products"),
    ("recurring-invoices", "List, show, and manage recurring invoices"),
    ("purchase-orders", "List, show, and manage purchase orders"),
    ("recurring-expenses", "List, show, and manage recurring expenses"),
    ("recurring-quotes", "List, show, and manage recurring quotes"),
    ("bank-transactions", "List, show, and manage bank transactions"),
    ("bank-integrations", "List, show, and manage bank integrations"),
    ("bank-transaction-rules", "List, show, and manage bank transaction rules"),
    ("group-settings", "List, show, and manage group settings"),
    ("expense-categories", "List, show, and manage expense categories"),
    ("tax-rates", "List, show, and manage tax rates"),
    ("payment-terms", "List, show, and manage payment terms"),
    ("task-schedulers", "List, show, and manage task schedulers"),
    ("task-statuses", "List, show, and manage task statuses"),
)

_LATE_RESOURCE_COMMANDS = (
    ("documents", "List, show, and manage documents"),
    ("designs", "List, show, and manage designs"),
    ("templates", "List, show, and manage templates"),
    ("users", "List, show, and manage users"),
    ("companies", "List, show, and manage companies"),
    ("company-gateways", "List, show, and manage company gateways"),
)

_FINAL_RESOURCE_COMMANDS = (
    ("company-users", "List, show, and manage company users"),
    ("tokens", "List, show, and manage API tokens"),
    ("webhooks", "List, show, and manage webhooks"),
    ("subscriptions", "List, show, and manage subscriptions"),
    ("client-gateway-tokens", "List, show, and manage client gateway tokens"),
)

_ENDPOINT_COMMANDS = (
    ("reports", "Query reports", "reports"),
    ("charts", "Query charts", "charts"),
    ("search", "Search across Invoice Ninja records", "search"),
    (
        "utility",
        "Call utility endpoints such as ping, health-check, refresh, and preview",
        "ping",
    ),
)

_SUBCOMMAND_ALIASES = {
    "blank": "template",
    "new-template": "template",
    "edit-form": "edit-template",
}

_INCLUDE_HELP = "Related resources to include, comma-separated; repeatable"


def _ranged_int(low: int, high: int | None) -> Callable[[str], int]:
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"`{text}` is not a number") from None
        if value < low or (high is not None and value > high):
            bound = f"{low}..={high}" if high is not None else f"{low}.."
            raise argparse.ArgumentTypeError(f"{value} is not in {bound}")
        return value

    return convert


def _split_commas(text: str) -> list[str]:
    return text.split(",")


def _global_parent() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--output",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=argparse.SUPPRESS,
        help="Output format for commands that return data",
    )
    return parent


class _Builder:
    """Adds subcommand parsers that all carry the global options."""

    def __init__(self) -> None:
        self.parent = _global_parent()

    def add(
        self,
        subparsers: argparse._SubParsersAction,
        name: str,
        help_text: str | None = None,
        epilog: str | None = None,
        aliases: Sequence[str] = (),
    ) -> argparse.ArgumentParser:
        return subparsers.add_parser(
            name,
            help=help_text,
            description=help_text,
            epilog=epilog,
            aliases=list(aliases),
            parents=[self.parent],
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )


def _add_include(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--include",
        action="extend",
        type=_split_commas,
        default=None,
        metavar="name[,name]",
        help=_INCLUDE_HELP,
    )


def _add_id(parser: argparse.ArgumentParser, help_text: str = "Invoice Ninja hashed ID") -> None:
    parser.add_argument("id", help=help_text)


def _add_safety(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the JSON request preview without calling Invoice Ninja",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm a destructive or externally visible mutation",
    )


def _add_raw_payload(parser: argparse.ArgumentParser, noun: str = "") -> None:
    group = parser.add_mutually_exclusive_group()
    prefix = f"{noun} " if noun else ""
    group.add_argument("--data", metavar="JSON", help=f"Raw {prefix}JSON payload")
    group.add_argument(
        "--data-file",
        dest="data_file",
        type=Path,
        metavar="PATH",
        help=f"Read {prefix}JSON payload from a file",
    )
    group.add_argument(
        "--stdin",
        action="store_true",
        help=f"Read {prefix}JSON payload from standard input",
    )


def _add_line_items(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--line-item",
        dest="line_items",
        action="append",
        metavar="key=value,...",
        help="Line item as comma-separated key=value pairs; repeatable",
    )


def _add_resource_payload(parser: argparse.ArgumentParser) -> None:
    _add_raw_payload(parser)
    parser.add_argument("--field", dest="fields", action="append", metavar="key=value")
    parser.add_argument("--name")
    parser.add_argument("--number")
    parser.add_argument("--client-id")
    parser.add_argument("--vendor-id")
    parser.add_argument("--project-id", help="Project hashed ID")
    parser.add_argument("--date", help="Date, usually YYYY-MM-DD")
    parser.add_argument("--due-date", help="Due date, usually YYYY-MM-DD")
    parser.add_argument("--amount", help="Amount or rate")
    parser.add_argument("--price", help="Price for product-like records")
    parser.add_argument(
        "--quantity", help="Quantity for product-like or document-like records"
    )
    parser.add_argument("--public-notes", help="Public client-facing notes")
    parser.add_argument("--private-notes", help="Private internal notes")
    _add_line_items(parser)


def _add_invoice_payload(parser: argparse.ArgumentParser) -> None:
    _add_raw_payload(parser, "invoice")
    parser.add_argument("--client-id", help="Client hashed ID")
    parser.add_argument("--date", help="Invoice date, usually YYYY-MM-DD")
    parser.add_argument("--due-date", help="Due date, usually YYYY-MM-DD")
    parser.add_argument("--number", help="Invoice number")
    parser.add_argument("--po-number", help="Purchase order number")
    parser.add_argument("--public-notes", help="Public client-facing notes")
    parser.add_argument("--private-notes", help="Private internal notes")
    parser.add_argument("--terms", help="Invoice terms")
    parser.add_argument("--footer", help="Invoice footer")
    parser.add_argument("--project-id", help="Project hashed ID")
    _add_line_items(parser)


def _add_invoice_triggers(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--send-email", action="store_true", help="Save and send the invoice email")
    parser.add_argument("--mark-sent", action="store_true", help="Save and mark the invoice as sent")
    parser.add_argument("--paid", action="store_true", help="Save and mark the invoice as paid")
    parser.add_argument("--amount-paid", help="Amount paid to record with --paid")
    parser.add_argument("--cancel", action="store_true", help="Save and mark the invoice as cancelled")
    parser.add_argument(
        "--save-default-footer", action="store_true", help="Save the footer as the default footer"
    )
    parser.add_argument(
        "--save-default-terms", action="store_true", help="Save the terms as the default terms"
    )
    parser.add_argument("--retry-e-send", action="store_true", help="Retry e-send for the invoice")


def _add_list_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--page", type=_ranged_int(1, None), default=1, help="Page number to request"
    )
    parser.add_argument(
        "--per-page",
        type=_ranged_int(1, MAX_PER_PAGE),
        default=20,
        help="Records per page to request",
    )
    _add_include(parser)
    parser.add_argument(
        "--filter",
        dest="filters",
        action="append",
        metavar="key=value",
        help="Raw Invoice Ninja filter in key=value form; repeatable",
    )
    parser.add_argument(
        "--sort",
        metavar="field|asc",
        help="Raw Invoice Ninja sort expression, such as name|asc or date|desc",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Fetch pages until the API returns fewer rows than requested",
    )
    parser.add_argument(
        "--limit", type=_ranged_int(1, None), help="Maximum number of rows to emit"
    )


def _add_show_args(parser: argparse.ArgumentParser) -> None:
    _add_id(parser)
    _add_include(parser)


def _add_confirmable_id_args(parser: argparse.ArgumentParser) -> None:
    _add_id(parser)
    _add_safety(parser)
    _add_include(parser)


def _add_bulk_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--action",
        required=True,
        help="Bulk action to perform, such as archive, restore, delete, email, or bulk_download",
    )
    parser.add_argument(
        "--id", dest="ids", action="append", required=True, metavar="ID",
        help="Hashed ID; repeatable",
    )
    parser.add_argument("--email-type", help="Email type for bulk email actions")
    _add_safety(parser)
    _add_include(parser)


def _add_upload_args(parser: argparse.ArgumentParser) -> None:
    _add_id(parser)
    parser.add_argument(
        "--file", dest="files", action="append", required=True, type=Path, metavar="PATH"
    )
    _add_safety(parser)
    _add_include(parser)


def _add_download_args(parser: argparse.ArgumentParser) -> None:
    _add_id(
        parser,
        "Invoice invitation key for `download`, or invoice hashed ID for `delivery-note`",
    )
    parser.add_argument(
        "--output-file",
        "-o",
        dest="output_file",
        type=Path,
        required=True,
        metavar="PATH",
        help="File path to write the downloaded PDF to",
    )
    parser.add_argument(
        "--force", action="store_true", help="Overwrite the output file if it already exists"
    )
    _add_include(parser)


def _add_list_and_show(builder: _Builder, subs: argparse._SubParsersAction, noun: str) -> None:
    _add_list_args(
        builder.add(
            subs,
            "list",
            f"List {noun} with pagination, filters, and sorting",
            f"Examples:\n  koban {noun} list --page 1 --per-page 20",
        )
    )
    _add_show_args(
        builder.add(
            subs,
            "show",
            "Show one record by hashed ID",
            f"Examples:\n  koban {noun} show k9avmeG1P0 --output json",
        )
    )


def _add_templates(builder: _Builder, subs: argparse._SubParsersAction, noun: str) -> None:
    _add_include(
        builder.add(
            subs,
            "template",
            "Show the default object template from GET /create",
            f"Examples:\n  koban {noun} template --output json",
            aliases=("blank", "new-template"),
        )
    )
    _add_show_args(
        builder.add(
            subs,
            "edit-template",
            "Show the editable object template from GET /{id}/edit",
            f"Examples:\n  koban {noun} edit-template k9avmeG1P0 --output json",
            aliases=("edit-form",),
        )
    )


def _add_resource_commands(builder: _Builder, parser: argparse.ArgumentParser, noun: str) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    _add_list_and_show(builder, subs, noun)
    _add_templates(builder, subs, noun)

    create = builder.add(subs, "create", "Create a record from guided fields or JSON")
    _add_resource_payload(create)
    _add_safety(create)
    _add_include(create)

    update = builder.add(subs, "update", "Update a record by hashed ID")
    _add_id(update)
    _add_resource_payload(update)
    _add_safety(update)
    _add_include(update)

    _add_confirmable_id_args(builder.add(subs, "delete", "Delete a record by hashed ID"))
    _add_bulk_args(builder.add(subs, "bulk", "Run a bulk resource action"))
    _add_upload_args(builder.add(subs, "upload", "Upload documents to a resource"))

    action = builder.add(subs, "action", "Run a custom resource action")
    _add_id(action)
    action.add_argument(
        "--action",
        required=True,
        help="Action path segment, such as archive, restore, email, convert, start, or stop",
    )
    _add_resource_payload(action)
    _add_safety(action)
    _add_include(action)

    _add_download_args(
        builder.add(
            subs, "download", "Save a resource PDF by invitation key when the API supports it"
        )
    )


def _add_inspect_commands(builder: _Builder, parser: argparse.ArgumentParser, noun: str) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    _add_list_and_show(builder, subs, noun)


def _add_endpoint_commands(builder: _Builder, parser: argparse.ArgumentParser) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    run = builder.add(subs, "run", "Send a read-like POST or GET request to a named endpoint")
    run.add_argument(
        "--endpoint",
        help="Endpoint path under /api/v1, such as search, reports, ping, or preview",
    )
    run.add_argument(
        "--method",
        type=HttpMethod,
        choices=list(HttpMethod),
        metavar="{get,post,put,delete}",
        help="HTTP method to use",
    )
    _add_resource_payload(run)
    _add_safety(run)
    _add_include(run)


def _add_invoice_commands(builder: _Builder, parser: argparse.ArgumentParser) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    _add_list_args(
        builder.add(
            subs,
            "list",
            "List invoices with pagination, filters, and sorting",
            "Examples:\n  koban invoices list --page 1 --per-page 20\n"
            "  koban invoices list --filter status_id=gt:1 --sort 'date|desc' --output json",
        )
    )
    _add_show_args(
        builder.add(
            subs,
            "show",
            "Show one invoice by hashed ID",
            "Examples:\n  koban invoices show k9avmeG1P0 --output json\n"
            "  koban invoices show k9avmeG1P0 --include client",
        )
    )
    _add_templates(builder, subs, "invoices")

    create = builder.add(
        subs,
        "create",
        "Create a draft invoice",
        "Examples:\n"
        "  koban invoices create --client-id k9avmeG1P0 "
        "--line-item product_key=Consulting,quantity=1,cost=100 --dry-run\n"
        "  koban invoices create --data-file invoice.json --include client\n"
        "  printf '%s' '{\"client_id\":\"k9avmeG1P0\",\"line_items\":[]}' "
        "| koban invoices create --stdin --dry-run",
    )
    _add_invoice_payload(create)
    _add_invoice_triggers(create)
    _add_safety(create)
    _add_include(create)

    update = builder.add(
        subs,
        "update",
        "Update an invoice by hashed ID",
        "Examples:\n"
        "  koban invoices update k9avmeG1P0 --data-file invoice.json --dry-run\n"
        "  koban invoices update k9avmeG1P0 --public-notes 'Thanks again' --mark-sent --yes",
    )
    _add_id(update)
    _add_invoice_payload(update)
    _add_invoice_triggers(update)
    _add_safety(update)
    _add_include(update)

    _add_confirmable_id_args(
        builder.add(
            subs,
            "delete",
            "Delete an invoice by hashed ID",
            "Examples:\n  koban invoices delete k9avmeG1P0 --dry-run\n"
            "  koban invoices delete k9avmeG1P0 --yes",
        )
    )
    _add_bulk_args(
        builder.add(
            subs,
            "bulk",
            "Run a bulk invoice action",
            "Examples:\n  koban invoices bulk --action archive --id inv_1 --id inv_2 --dry-run\n"
            "  koban invoices bulk --action email --email-type invoice --id inv_1 --yes",
        )
    )
    _add_upload_args(
        builder.add(
            subs,
            "upload",
            "Upload documents to an invoice",
            "Examples:\n  koban invoices upload k9avmeG1P0 --file contract.pdf --dry-run\n"
            "  koban invoices upload k9avmeG1P0 --file contract.pdf --yes",
        )
    )

    action = builder.add(
        subs,
        "action",
        "Run a single-invoice action",
        "Examples:\n  koban invoices action k9avmeG1P0 --action mark_paid --dry-run\n"
        "  koban invoices action k9avmeG1P0 --action email --yes",
    )
    _add_id(action)
    action.add_argument(
        "--action",
        required=True,
        help="Invoice action, such as mark_paid, archive, delete, email, or clone_to_quote",
    )
    _add_safety(action)
    _add_include(action)

    _add_download_args(
        builder.add(
            subs,
            "download",
            "Save an invoice PDF by invitation key",
            "Examples:\n  koban invoices download invitation_key --output-file invoice.pdf",
        )
    )
    _add_download_args(
        builder.add(
            subs,
            "delivery-note",
            "Save a delivery note PDF by invoice ID",
            "Examples:\n"
            "  koban invoices delivery-note k9avmeG1P0 --output-file delivery-note.pdf",
        )
    )


def _add_auth_commands(builder: _Builder, parser: argparse.ArgumentParser) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    login = builder.add(
        subs, "login", "Store an API token (verified against the API unless --no-verify)"
    )
    login.add_argument(
        "--token",
        help="API token. If omitted, koban reads it from stdin (pipe) or prompts on a TTY",
    )
    login.add_argument(
        "--base-url", metavar="URL", help="Invoice Ninja base URL to store alongside the token"
    )
    login.add_argument(
        "--keychain",
        action="store_true",
        help="Store the token in the OS keychain instead of the config file",
    )
    login.add_argument(
        "--no-verify", action="store_true", help="Skip the live API check and save the token as-is"
    )
    builder.add(subs, "logout", "Remove the stored token (the OS keychain entry too)")
    builder.add(subs, "status", "Show which credential source is active (never prints the token)")


def _add_skill_commands(builder: _Builder, parser: argparse.ArgumentParser) -> None:
    subs = parser.add_subparsers(dest="subcommand", required=True, metavar="COMMAND")
    for name, help_text in (
        ("generate", "Write skill files to a directory for review (default ./koban-skills)"),
        ("install", "Write skill files into live harness configuration locations"),
    ):
        skill = builder.add(subs, name, help_text)
        skill.add_argument(
            "--target",
            action="append",
            type=SkillTarget,
            choices=list(SkillTarget),
            help="Harness targets to emit (repeatable). Defaults to `all`",
        )
        skill.add_argument(
            "--dir",
            type=Path,
            metavar="PATH",
            help="Output root (generate) or base directory override (install)",
        )
        skill.add_argument(
            "--global",
            dest="global_",
            action="store_true",
            help="Install into the user-level config (home) instead of the current project",
        )
        skill.add_argument("--force", action="store_true", help="Overwrite existing files")


def build_parser() -> argparse.ArgumentParser:
    """Build the full koban argument parser."""
    builder = _Builder()
    parser = argparse.ArgumentParser(
        prog="koban",
        description="koban is an Invoice Ninja CLI for humans and AI agents.",
        epilog=_MAIN_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.TABLE,
        help="Output format for commands that return data",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    statics = builder.add(
        commands,
        "statics",
        "Show reference data such as countries, currencies, and statuses",
        "Examples:\n  koban statics\n  koban statics --output json",
    )
    statics.set_defaults(kind="statics")

    def resource(name: str, help_text: str) -> None:
        sub = builder.add(commands, name, help_text)
        sub.set_defaults(kind="resource")
        _add_resource_commands(builder, sub, name)

    def inspect(name: str, help_text: str) -> None:
        sub = builder.add(commands, name, help_text)
        sub.set_defaults(kind="inspect")
        _add_inspect_commands(builder, sub, name)

    resource(*_RESOURCE_COMMANDS[0])
    invoices = builder.add(
        commands, "invoices", "List, show, create, update, and manage invoices"
    )
    invoices.set_defaults(kind="invoice")
    _add_invoice_commands(builder, invoices)
    for name, help_text in _RESOURCE_COMMANDS[1:]:
        resource(name, help_text)
    inspect("activities", "List, show, and inspect activities")
    inspect("system-logs", "List, show, and inspect system logs")
    for name, help_text in _LATE_RESOURCE_COMMANDS:
        resource(name, help_text)
    inspect("company-ledger", "List and inspect company ledger entries")
    for name, help_text in _FINAL_RESOURCE_COMMANDS:
        resource(name, help_text)

    for name, help_text, default_endpoint in _ENDPOINT_COMMANDS:
        sub = builder.add(commands, name, help_text)
        sub.set_defaults(kind="endpoint", default_endpoint=default_endpoint)
        _add_endpoint_commands(builder, sub)

    auth = builder.add(commands, "auth", "Store, inspect, and remove Invoice Ninja credentials")
    auth.set_defaults(kind="auth")
    _add_auth_commands(builder, auth)

    skill = builder.add(
        commands, "skill", "Generate or install an agent skill that teaches a harness to use koban"
    )
    skill.set_defaults(kind="skill")
    _add_skill_commands(builder, skill)

    update = builder.add(commands, "update", "Check or install release updates", _UPDATE_EPILOG)
    update.set_defaults(kind="update")
    update.add_argument(
        "--check",
        action="store_true",
        help="Report whether an update is available without writing to disk",
    )
    update.add_argument(
        "--force",
        action="store_true",
        help="Reinstall or downgrade even when the target matches the current version",
    )
    release = update.add_mutually_exclusive_group()
    release.add_argument(
        "--tag", metavar="TAG", help="Install a specific release tag instead of the latest release"
    )
    release.add_argument(
        "--nightly",
        action="store_true",
        help="Install the rolling nightly build from the nightly release",
    )

    completions = builder.add(
        commands, "completions", "Print shell completion scripts", _COMPLETIONS_EPILOG
    )
    completions.set_defaults(kind="completions")
    completions.add_argument(
        "shell",
        type=CompletionShell,
        choices=list(CompletionShell),
        help="Shell to generate completions for",
    )
    return parser


def _finish(args: argparse.Namespace) -> argparse.Namespace:
    subcommand = getattr(args, "subcommand", None)
    if subcommand is not None:
        args.subcommand = _SUBCOMMAND_ALIASES.get(subcommand, subcommand)

    for name in ("include", "filters", "fields", "line_items"):
        if hasattr(args, name) and getattr(args, name) is None:
            setattr(args, name, [])

    if getattr(args, "kind", None) == "skill" and args.target is None:
        args.target = [SkillTarget.ALL]

    if hasattr(args, "dry_run"):
        args.safety = WriteSafety(dry_run=args.dry_run, yes=args.yes)

    if hasattr(args, "send_email"):
        args.triggers = InvoiceTriggers(
            send_email=args.send_email,
            mark_sent=args.mark_sent,
            paid=args.paid,
            amount_paid=args.amount_paid,
            cancel=args.cancel,
            save_default_footer=args.save_default_footer,
            save_default_terms=args.save_default_terms,
            retry_e_send=args.retry_e_send,
        )

    if args.subcommand == "list" if subcommand is not None else False:
        args.list_options = ListOptions(
            page=args.page,
            per_page=args.per_page,
            include=args.include,
            filters=args.filters,
            sort=args.sort,
            all=args.all,
            limit=args.limit,
        )
    return args


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; print help and exit when none are given."""
    parser = build_parser()
    arguments = sys.argv[1:] if argv is None else list(argv)
    if not arguments:
        parser.print_help(sys.stderr)
        raise SystemExit(2)
    return _finish(parser.parse_args(arguments))