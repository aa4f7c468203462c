"""Verify that the service configuration loads from an environment file.

Instantiates ``AppSettings`` from the given ``.env`` file so missing or
malformed entries are reported before the API starts, then prints the
resolved configuration with every secret redacted.

Example usage::

    python -m scripts.check_env --env-file /opt/devsim/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from devsim_api.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5

REDACTED = "***"


def _load_settings(env_file: Path) -> AppSettings:
    """Load settings after exporting the supplied env file."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _summarize(settings: AppSettings) -> list[str]:
    """Describe the resolved configuration without revealing secrets."""
    github = settings.github
    session = settings.session
    return [
        f"environment:        {settings.environment}",
        f"github.client_id:   {github.client_id}",
        f"github.secret:      {REDACTED}",
        f"github.callback:    {github.redirect_uri or github.callback_path}",
        f"github.scope:       {github.scope}",
        f"session.secret:     {REDACTED if session.secret else '(client secret)'}",
        f"session.ttl:        {session.ttl_seconds}s",
        f"session.secure:     {session.cookie_secure}",
        f"http.timeout:       {settings.http.timeout_seconds}s",
        f"gemini.configured:  {bool(settings.gemini.api_key)}",
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate required settings and print a redacted summary."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the repo root).",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only report failures.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file

    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2, include_input=False)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Unexpected error during validation: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not args.quiet:
        print("\n".join(_summarize(settings)))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
