"""x402lint CLI: validate x402 configs, manifests and live 402 responses."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_INPUT_ERROR = 2

DEFAULT_TIMEOUT = 10.0


def is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def fetch_response(url: str, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """GET ``url`` and return a response mapping usable by check().

    Any status is accepted; servers usually answer 402 but some embed the
    config in a 200 body. Transport failures raise httpx.HTTPError.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
    try:
        response = client.get(url, headers={"Accept": "application/json"})
    finally:
        if owns_client:
            client.close()
    logger.debug("GET %s -> %s", url, response.status_code)
    return {
        "status": response.status_code,
        "headers": response.headers,
        "body": response.text,
    }


def read_input(source: Optional[str]) -> str:
    """Resolve INPUT to document text: inline JSON, a file path, or stdin."""
    if source is None or source == "-":
        return sys.stdin.read()
    if source.lstrip().startswith(("{", "[")):
        return source
    return Path(source).read_text(encoding="utf-8")


def _emit(text: str, args: argparse.Namespace) -> None:
    if not args.quiet:
        print(text)


def main():
    """Main CLI entry point for x402lint."""
    try:
        x402lint_version = get_version("x402lint")
    except PackageNotFoundError:
        x402lint_version = "dev"

    parser = argparse.ArgumentParser(
        prog="x402lint",
        description="x402lint: validate x402 payment-required configs and manifests",
    )
    parser.add_argument("--version", action="version", version=f"x402lint {x402lint_version}")
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Inline JSON, a file path, an http(s) URL, or '-' for stdin (default: stdin)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as errors."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON."
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output; only the exit code reports validity."
    )
    parser.add_argument(
        "--manifest",
        action="store_true",
        help="Validate the input as a multi-endpoint manifest (auto-detected otherwise)."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log detection and normalization decisions to stderr."
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    # Lazy import keeps --help and --version fast
    from x402lint._internal.render import (
        dumps_result,
        format_check_result,
        format_manifest_result,
        format_validation_result,
    )
    from x402lint.api import check, detect, validate, validate_manifest
    from x402lint.kernel.detect import ConfigFormat

    options = {"strict": args.strict}

    if args.input is not None and is_url(args.input):
        try:
            response = fetch_response(args.input)
        except httpx.HTTPError as e:
            print(f"Error: could not fetch {args.input}: {e}", file=sys.stderr)
            sys.exit(EXIT_INPUT_ERROR)
        result = check(response, options)
        _emit(dumps_result(result) if args.json else format_check_result(result), args)
        sys.exit(EXIT_VALID if result.valid else EXIT_INVALID)

    if args.input is None and sys.stdin.isatty():
        parser.print_help(sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    try:
        text = read_input(args.input)
    except FileNotFoundError:
        print(f"Error: file not found: {args.input}", file=sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: could not read {args.input}: {e}", file=sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    if args.manifest or detect(text) is ConfigFormat.MANIFEST:
        manifest_result = validate_manifest(text, options)
        _emit(dumps_result(manifest_result) if args.json else format_manifest_result(manifest_result), args)
        sys.exit(EXIT_VALID if manifest_result.valid else EXIT_INVALID)

    result = validate(text, options)
    _emit(dumps_result(result) if args.json else format_validation_result(result), args)
    sys.exit(EXIT_VALID if result.valid else EXIT_INVALID)


if __name__ == "__main__":
    main()
