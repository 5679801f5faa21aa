"""Workflow that copies (or deletes) Kubernetes secret data in Secret Manager."""
import json
import logging
from typing import List

from ..domains.errors import EmptyResultError, MigrationAborted, MigrationError
from ..domains.models import (
    MigrationContext,
    MigrationMode,
    MigrationRecord,
    RunReport,
    SourceSecret,
)
from ..domains.naming import destination_name, is_excluded, is_reserved_key

logger = logging.getLogger(__name__)

REPORT_HEADER = "k8s_secret_name,google_secret_name,gcp_project,k8s_namespace,secret_key_name"
NO_SECRETS_NOTICE = "No secrets found to migrate, no action taken"


def _filter_secrets(secrets: List[SourceSecret], context: MigrationContext) -> List[SourceSecret]:
    """Drop service account tokens and secrets named in the exclude list."""
    kept = []
    for index, secret in enumerate(secrets, start=1):
        logger.debug(f"Found [{index}]: {secret.name}")
        if is_excluded(secret.name, context.exclusions):
            logger.debug(f"Skipped secret ['{secret.name}']")
            continue
        kept.append(secret)
    logger.info(f"List: {[s.name for s in kept]}")
    return kept


def _process_key(secret: SourceSecret, data_key: str, payload: bytes,
                 context: MigrationContext, writer) -> MigrationRecord:
    """Create or delete the destination secret for one data key."""
    name = destination_name(secret.name, data_key)

    if context.mode is MigrationMode.DELETE:
        writer.delete_secret(name, context.project)
        logger.info(f"  - Deleted secret named ['{name}'] in GCP project: ['{context.project}']")
    else:
        logger.debug(
            f"Creating ['{name}'] in project ['{context.project}'] from Kubernetes secret "
            f"['{secret.name}'] key ['{data_key}'] in namespace ['{context.namespace}']"
        )
        handle = writer.create_secret(name, context.project)
        writer.add_version(handle, payload)
        logger.info(f"  - Created secret named ['{name}'] in GCP project: ['{context.project}']")

    return MigrationRecord(
        source_name=secret.name,
        destination_name=name,
        project=context.project,
        namespace=context.namespace,
        data_key=data_key,
        action=context.mode.value,
    )


def run_migration(context: MigrationContext, lister, writer) -> RunReport:
    """
    Migrate every eligible data key of every secret in a namespace.

    Args:
        context: Namespace, project, exclusions and mode for this run
        lister: Object with list_secrets(namespace)
        writer: Object with create_secret, add_version and delete_secret

    Returns:
        RunReport with one record per processed data key

    Raises:
        ClusterAccessError: If listing fails
        EmptyResultError: If the namespace holds no secrets
        MigrationAborted: On the first failed item; carries the partial report.
            Items processed before the failure are not rolled back.
    """
    logger.info(f"Getting all secrets from [namespace: '{context.namespace}']")
    secrets = lister.list_secrets(context.namespace)
    if not secrets:
        raise EmptyResultError(
            f"No secrets found in namespace '{context.namespace}', no action taken"
        )

    logger.info("Filtering secret list to skip 'default-token-*' secrets and excluded names")
    secrets = _filter_secrets(secrets, context)

    report = RunReport()
    verb = "Deleting" if context.mode is MigrationMode.DELETE else "Migrating"
    for secret in secrets:
        for data_key, payload in secret.data.items():
            if is_reserved_key(data_key):
                logger.debug(f"Skipped secret object ['{data_key}'] of ['{secret.name}']")
                continue

            logger.info(f"{verb} secret object(s) for ['{secret.name}']")
            # Whole-run abort: the first failure stops processing
            try:
                record = _process_key(secret, data_key, payload, context, writer)
            except MigrationError as e:
                raise MigrationAborted(
                    f"{verb} ['{secret.name}'] key ['{data_key}'] failed: {e}", report, e
                ) from e
            report.add(record)

    logger.info(f"SafeName List: {json.dumps(report.processed_names)}")
    return report


def format_report(report: RunReport) -> List[str]:
    """Render the audit report; empty when nothing was processed."""
    if report.count == 0:
        return []
    return [REPORT_HEADER] + [record.to_row() for record in report.records]
