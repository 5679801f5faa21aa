"""CLI entrypoint for k8s-secret-migrator."""
import sys
import argparse
import logging

from k8s_secret_migrator import __version__
from .validators import normalize_namespace, parse_bool, validate_project

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Log progress to stderr so stdout carries only the report."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )
    # Keep third-party transport chatter out of --debug output
    for noisy in ("urllib3", "google", "kubernetes"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _print_report(report) -> None:
    from k8s_secret_migrator.migration.workflows.migrate_operations import (
        NO_SECRETS_NOTICE,
        format_report,
    )

    lines = format_report(report)
    if not lines:
        print(NO_SECRETS_NOTICE)
        return
    for line in lines:
        print(line)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="k8s-secret-migrator",
        description="Copy Kubernetes secrets into GCP Secret Manager, one secret per data key",
        epilog="""
Each data key of each secret becomes a Secret Manager secret named
<secret-name>-<data-key>, with periods turned into hyphens and any other
character outside [A-Za-z0-9-] removed. Secrets named 'default-token-*' and
data keys 'namespace', 'token' and 'ca.crt' are never migrated.

Exit codes:
  0 - Success
  1 - Runtime error (cluster access, no secrets, Secret Manager failure, etc.)
  2 - Usage error (missing project, invalid arguments)

Environment variables:
  GCP_PROJECT                    - Destination project when --project is not given
  K8S_SECRET_MIGRATOR_CONFIG     - Path to the YAML config file
  GOOGLE_APPLICATION_CREDENTIALS - Path to service account key JSON

Notes:
  Creation is not idempotent: re-running against an existing destination
  fails with an 'already exists' error and stops the run. Concurrent runs
  against the same namespace and project are not guarded against.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="Namespace to look for secrets (default: default)"
    )
    parser.add_argument(
        "--exclude",
        default=None,
        help="Comma delimited names of secrets to skip, matched exactly (default: '')"
    )
    parser.add_argument(
        "--project",
        default=None,
        help="GCP project to migrate secrets to (required unless set via GCP_PROJECT or config)"
    )
    parser.add_argument(
        "--delete",
        nargs="?",
        const=True,
        default=False,
        type=parse_bool,
        metavar="BOOL",
        help="Delete the Secret Manager secrets instead of creating them (--delete or --delete=true)"
    )
    parser.add_argument(
        "--debug",
        nargs="?",
        const=True,
        default=False,
        type=parse_bool,
        metavar="BOOL",
        help="Enable verbose per-item logging (--debug or --debug=true)"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file (default: ~/.config/k8s-secret-migrator/config.yml if present)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"k8s-secret-migrator {__version__}"
    )
    return parser


def cmd_migrate(args):
    """Run the migration and print the report."""
    from k8s_secret_migrator.migration.domains.config_loader import (
        apply_credentials,
        get_setting,
        load_config,
    )
    from k8s_secret_migrator.migration.domains.errors import MigrationAborted
    from k8s_secret_migrator.migration.domains.gcp_client import GCPSecretClient
    from k8s_secret_migrator.migration.domains.k8s_client import KubernetesSecretClient
    from k8s_secret_migrator.migration.domains.models import MigrationContext, MigrationMode
    from k8s_secret_migrator.migration.domains.naming import build_exclusion_set
    from k8s_secret_migrator.migration.workflows.migrate_operations import run_migration

    config = load_config(args.config)
    writer = GCPSecretClient()

    project = args.project or writer.get_project_id() or get_setting(config, "gcp", "project_id")
    # YAML reads an unquoted project number as an int
    if project is not None:
        project = str(project)
    validate_project(project)

    namespace = args.namespace
    if namespace is None:
        namespace = get_setting(config, "kubernetes", "namespace")
    namespace = normalize_namespace(namespace)

    exclude = args.exclude
    if exclude is None:
        exclude = get_setting(config, "migration", "exclude") or ""

    context = MigrationContext(
        namespace=namespace,
        project=project,
        exclusions=build_exclusion_set(exclude),
        mode=MigrationMode.DELETE if args.delete else MigrationMode.CREATE,
    )

    logger.info(f"Starting migration script [namespace: '{namespace}'] [project: '{project}']")
    apply_credentials(config)
    lister = KubernetesSecretClient(kubeconfig=get_setting(config, "kubernetes", "kubeconfig"))

    try:
        report = run_migration(context, lister, writer)
    except MigrationAborted as e:
        _print_report(e.report)
        raise

    _print_report(report)


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (cluster access, empty namespace, Secret Manager failures)
        2 - Usage errors (missing project, invalid flag values)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    try:
        cmd_migrate(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
