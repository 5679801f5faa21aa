"""Input validation for CLI arguments."""
import argparse
import sys

DEFAULT_NAMESPACE = "default"

# Spellings accepted for boolean flags given as --flag=value
_TRUE_VALUES = {"1", "t", "true", "y", "yes"}
_FALSE_VALUES = {"0", "f", "false", "n", "no"}


def parse_bool(value: str) -> bool:
    """
    Parse the value of a boolean flag such as ``--delete=True``.

    Raises:
        argparse.ArgumentTypeError: If the value is not a recognised boolean
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}' (use true or false)")


def validate_project(project: str) -> None:
    """
    Validate that a destination project was given.

    Any non-empty value is accepted: project IDs and project numbers both
    work in Secret Manager resource names.

    Args:
        project: Resolved GCP project ID or number

    Raises:
        SystemExit with code 2 if no project was given
    """
    if not project:
        print("Error: `--project=` is not defined in arguments", file=sys.stderr)
        print("\nSet --project, the GCP_PROJECT environment variable or gcp.project_id in the config file.",
              file=sys.stderr)
        sys.exit(2)


def normalize_namespace(namespace: str) -> str:
    """Fall back to 'default' when an unset variable was passed as --namespace=."""
    return namespace or DEFAULT_NAMESPACE
