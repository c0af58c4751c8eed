from __future__ import annotations

import argparse

DEFAULT_UUID_VERSION = 4

_EPILOG = """\
examples:
  extract all patterns:
    urlsluice --file input.txt --emails --domains --ips --query-params

  extract only domains and IPs in silent mode:
    urlsluice --file input.txt --domains --ips --silent

  extract a specific UUID version:
    urlsluice --file input.txt --uuid 4

  report potential open redirects:
    urlsluice --file urls.txt --detect-redirects --redirect-config redirect.yaml
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="urlsluice",
        description="URL Sluice - extract patterns from text files",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument("--file", required=True, help="Path to the input file")
    p.add_argument(
        "--uuid",
        type=int,
        default=None,
        help=f"UUID version to extract (1-5, 0 disables; default {DEFAULT_UUID_VERSION})",
    )
    p.add_argument("--emails", action="store_true", help="Extract email addresses")
    p.add_argument("--domains", action="store_true", help="Extract domain names")
    p.add_argument("--ips", action="store_true", help="Extract IPv4 addresses")
    p.add_argument(
        "--query-params",
        "--queryParams",
        dest="query_params",
        action="store_true",
        help="Extract query parameters",
    )
    p.add_argument("--silent", action="store_true", help="Output data without titles")

    p.add_argument(
        "--detect-redirects",
        action="store_true",
        help="Report URLs whose query parameters look like open redirects",
    )
    p.add_argument(
        "--redirect-config",
        default=None,
        help="YAML file with a redirect_params list (default from env URLSLUICE_REDIRECT_CONFIG)",
    )
    p.add_argument(
        "--wordlist",
        action="store_true",
        help="Print a wordlist built from URL paths and query strings",
    )

    p.add_argument(
        "--timeout",
        type=float,
        default=0,
        help="Extraction deadline in seconds (default from env URLSLUICE_TIMEOUT_SECONDS, 300)",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=0,
        help="Override URLSLUICE_WORKERS",
    )
    p.add_argument("--log-level", default="WARNING", help="Python logging level (WARNING, DEBUG, ...)")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse ``argv``, rejecting extraction flags in URL-report modes."""
    p = build_parser()
    args = p.parse_args(argv)
    if args.detect_redirects or args.wordlist:
        extraction_flags = [
            flag
            for flag, given in (
                ("--uuid", args.uuid is not None),
                ("--emails", args.emails),
                ("--domains", args.domains),
                ("--ips", args.ips),
                ("--query-params", args.query_params),
            )
            if given
        ]
        if extraction_flags:
            p.error(
                f"{', '.join(extraction_flags)} cannot be combined with "
                "--detect-redirects or --wordlist"
            )
    return args
