"""Utility for verifying that the refresher's input files are intact.

The tool performs two checks before a scheduled run starts failing:

1. The secrets file parses as TOML and contains every credential needed for
   the token exchange.
2. The dataset file parses as a JSON array of ``{"id": ..., "guid": [...]}``
   records.

Example usage::

    python -m scripts.check_config --root-dir /opt/pbi-updater
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pbi_updater.core.config import PathSettings
from pbi_updater.core.errors import ConfigurationError
from pbi_updater.core.secrets import CREDENTIAL_KEYS, load_credentials
from pbi_updater.services import fold_dataset_entries, load_dataset_entries

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _validate_secrets(secrets_path: Path) -> None:
    """Ensure every credential key is present and non-empty."""
    credentials = load_credentials(secrets_path)
    missing = [key for key in CREDENTIAL_KEYS if not credentials.get(key)]
    if missing:
        raise ConfigurationError(
            f"Secrets file {secrets_path} is missing: {', '.join(missing)}"
        )


def _summarize_datasets(dataset_path: Path) -> str:
    entries = load_dataset_entries(dataset_path)
    groups = fold_dataset_entries(entries)
    total = sum(len(members) for members in groups.values())
    summary = f"{len(groups)} companies, {total} datasets"
    if len(groups) != len(entries):
        summary += f" ({len(entries) - len(groups)} duplicate company ids overridden)"
    return summary


def _ensure_exists(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(
            f"File {path} does not exist. "
            "Ensure the root directory is correct or create it before running."
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the secrets and dataset files used by the refresher."
    )
    parser.add_argument(
        "--root-dir",
        default=None,
        type=Path,
        help="Directory holding the files (default: PBI_ROOT_DIR or the current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    paths = PathSettings() if args.root_dir is None else PathSettings(root_dir=args.root_dir)

    try:
        _ensure_exists(paths.secrets_path)
        _ensure_exists(paths.dataset_path)
        _validate_secrets(paths.secrets_path)
        summary = _summarize_datasets(paths.dataset_path)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ConfigurationError as exc:
        print(f"Configuration validation failed:\n  {exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    print(f"Configuration OK: {summary}.")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
