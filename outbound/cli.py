"""Operator CLI for the EmailBison and HQ data clients.

Examples:
    python -m outbound account
    python -m outbound campaigns --status active
    python -m outbound replies --status unread --per-page 25
    python -m outbound companies --industry SaaS --limit 10

Credentials come from the environment (EMAILBISON_API_KEY, EMAILBISON_BASE_URL,
HQ_DATA_API_URL). Results are printed as JSON on stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, get_args

from outbound import services
from outbound.clients.emailbison import get_client
from outbound.clients.hq_data import HQDataError, get_hq_client
from outbound.config import ConfigurationError, EmailBisonSettings, HQDataSettings
from outbound.errors import EmailBisonError
from outbound.logging.structured import setup_structured_logging
from outbound.models import (
    CampaignStatusFilter,
    CompaniesFilters,
    ListCampaignsRequest,
    ListRepliesRequest,
    PeopleFilters,
    ReplyStatus,
)

logger = logging.getLogger(__name__)

EXIT_API_ERROR = 1
EXIT_CONFIG_ERROR = 2

EMAILBISON = "emailbison"
HQ_DATA = "hq_data"


def _cmd_account(args: argparse.Namespace) -> Awaitable[Any]:
    return services.get_account()


def _cmd_workspaces(args: argparse.Namespace) -> Awaitable[Any]:
    return services.list_workspaces()


def _cmd_campaigns(args: argparse.Namespace) -> Awaitable[Any]:
    return services.list_campaigns(ListCampaignsRequest(search=args.search, status=args.status))


def _cmd_replies(args: argparse.Namespace) -> Awaitable[Any]:
    filters = ListRepliesRequest(
        status=args.status,
        campaign_id=args.campaign_id,
        page=args.page,
        per_page=args.per_page,
    )
    return services.list_replies(filters)


def _cmd_companies(args: argparse.Namespace) -> Awaitable[Any]:
    return services.search_companies(
        CompaniesFilters(domain=args.domain, industry=args.industry, limit=args.limit)
    )


def _cmd_people(args: argparse.Namespace) -> Awaitable[Any]:
    return services.search_people(
        PeopleFilters(job_title=args.job_title, company_domain=args.company_domain, limit=args.limit)
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="outbound", description="EmailBison / HQ data API client")
    parser.add_argument("--verbose", action="store_true", help="Log every request attempt")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("account", help="Show the authenticated account").set_defaults(handler=_cmd_account, api=EMAILBISON)
    sub.add_parser("workspaces", help="List workspaces").set_defaults(handler=_cmd_workspaces, api=EMAILBISON)

    p_campaigns = sub.add_parser("campaigns", help="List campaigns")
    p_campaigns.add_argument("--search")
    p_campaigns.add_argument("--status", choices=get_args(CampaignStatusFilter))
    p_campaigns.set_defaults(handler=_cmd_campaigns, api=EMAILBISON)

    p_replies = sub.add_parser("replies", help="List inbox replies")
    p_replies.add_argument("--status", choices=get_args(ReplyStatus))
    p_replies.add_argument("--campaign-id", type=int)
    p_replies.add_argument("--page", type=int)
    p_replies.add_argument("--per-page", type=int)
    p_replies.set_defaults(handler=_cmd_replies, api=EMAILBISON)

    p_companies = sub.add_parser("companies", help="Search HQ company data")
    p_companies.add_argument("--domain")
    p_companies.add_argument("--industry")
    p_companies.add_argument("--limit", type=int, default=50)
    p_companies.set_defaults(handler=_cmd_companies, api=HQ_DATA)

    p_people = sub.add_parser("people", help="Search HQ people data")
    p_people.add_argument("--job-title")
    p_people.add_argument("--company-domain")
    p_people.add_argument("--limit", type=int, default=50)
    p_people.set_defaults(handler=_cmd_people, api=HQ_DATA)

    return parser


def _enable_client_debug(api: str) -> None:
    """Build the singleton the command talks to with request logging on."""
    if api == EMAILBISON:
        get_client(EmailBisonSettings(debug=True))
    else:
        get_hq_client(HQDataSettings(debug=True))


def _print_json(payload: Any, stream=None) -> None:
    print(json.dumps(payload, indent=2, default=str), file=stream or sys.stdout)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_structured_logging("DEBUG" if args.verbose else "WARNING", json_output=args.json_logs)

    handler: Callable[[argparse.Namespace], Awaitable[Any]] = args.handler
    try:
        if args.verbose:
            _enable_client_debug(args.api)
        result = asyncio.run(handler(args))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except (EmailBisonError, HQDataError) as exc:
        logger.debug("%s failed: %r", args.command, exc)
        _print_json(exc.to_dict(), stream=sys.stderr)
        return EXIT_API_ERROR

    _print_json(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
