# koban

Building blocks for working with Invoice Ninja from the terminal or from
scripts: credential storage and resolution, safe request paths, list queries,
invoice triggers, paginated fetching, dry-run previews and a full
command-line argument parser.

## Credentials (`koban.config_store`)

Credentials are resolved in this order, highest first:

1. the `INVOICE_NINJA_API_TOKEN` and `INVOICE_NINJA_BASE_URL` environment variables;
2. the OS keychain, when the stored config marks the token as keychain-backed;
3. the stored `config.json` file.

The base URL defaults to `https://invoicing.co`. An environment token is never
paired with a stored base URL. The config directory is the platform's user
config directory for `koban`, or `KOBAN_CONFIG_DIR` when that is set.

```python
from koban import config_store

config_store.save("https://invoicing.example.com", "token", False)
resolved = config_store.resolve()          # (base_url, api token)

info = config_store.status()
print(info.source.label(), info.base_url, info.config_path)

config_store.clear()   # removes the stored token, keeps a stored base URL
```

The stored file is written with owner-only permissions where the platform
supports them. A missing token raises `koban.errors.MissingTokenError`; an
unreadable or corrupt config raises `koban.errors.CredentialError`.

## Building list queries (`koban.query`)

```python
from koban.query import include_query, sort_query, filter_query, unrecognized_client_status_warning

include_query(["client", "payments"])   # [("include", "client,payments")]
sort_query("date|desc")                 # [("sort", "date|desc")]
filter_query(["status_id=gt:1"])        # [("status_id", "gt:1")]

warning = unrecognized_client_status_warning("invoices", ["client_status=outstanding"])
```

Invoice Ninja silently ignores unknown `client_status` values and returns every
row; the warning helper catches that for invoices. A filter without `key=value`
form raises `koban.errors.InvalidFilterError`. `validate_path_ids` checks a
list of ids as safe path segments.

## Paging (`koban.pages`)

`collect_pages(fetch_page, start_page, per_page, limit)` calls `fetch_page`
with each page number until the API returns fewer rows than requested, a row
limit is reached, or a cap of 100 pages is hit, and reports what it did under
`meta`. `apply_limit_to_response` trims a single response to a row limit.

## Safe writes (`koban.invoice`)

Every mutation needs an explicit confirmation or a dry run:

```python
from koban.invoice import WriteSafety, require_confirmation, render_dry_run

safety = WriteSafety(dry_run=True, yes=False)
require_confirmation("invoice delete", safety)
print(render_dry_run("DELETE", "api/v1/invoices/k9avmeG1P0", [], None, None))
```

Without `dry_run` or `yes`, `require_confirmation` raises
`koban.errors.ConfirmationRequiredError`. `InvoiceTriggers` holds the
state-changing invoice flags; `invoice_trigger_query` turns them into query
pairs and `validate_invoice_triggers` rejects `amount_paid` without `paid`.

IDs and action names must be single safe path segments
(`validate_path_segment`); anything else raises `InvalidPayloadError`.

## Endpoints and routes

`koban.endpoints.plan_endpoint_request` validates a request to a named
`/api/v1` endpoint and returns an `EndpointRequest`. Custom endpoints are
read-only unless they stay inside the reports or charts family, and GET or
DELETE requests may not carry a body; violations raise `InvalidRequestError`.

`koban.routes` builds bulk-action bodies and the paths for invoice actions,
invoice uploads and PDF downloads.

## Downloads and uploads (`koban.file_paths`)

`ensure_download_path` refuses to overwrite an existing file unless forced and
requires the parent directory to exist; `write_download_file` writes the bytes
after that check; `ensure_upload_file` checks that an upload is a regular file.
All raise `koban.errors.FileError`.

## Command-line parsing (`koban.cli`)

`build_parser()` returns an `argparse` parser for the whole koban command tree
(resources, invoices, endpoint runners, `auth`, `skill`, `update`,
`completions`). `parse_args(argv)` parses a list of arguments and adds
`safety`, `triggers` and `list_options` values where they apply. Option values
live in `koban.options` (`OutputFormat`, `SkillTarget`, `CompletionShell`,
`ListOptions`).

## What this package does not do

- It sends no HTTP requests: there is no API client. Paths, queries, bodies
  and dry-run previews are built, but calling Invoice Ninja is left to you.
- It installs no `koban` command. Arguments can be parsed, but nothing runs
  the parsed commands, renders tables, generates agent skills, prints shell
  completion scripts or performs self-updates.
- It has no keychain backend: saving with `use_keychain=True`, or resolving a
  config that points at the keychain, raises `CredentialError`.