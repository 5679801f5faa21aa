"""GCP Secret Manager client wrapper."""
import os
import logging
from typing import Optional
from google.api_core import exceptions as gcp_exceptions
from google.cloud import secretmanager

from .errors import WriterError

logger = logging.getLogger(__name__)


def _writer_error(action: str, secret_name: str, error: Exception) -> WriterError:
    """Translate a google-api-core exception into a WriterError."""
    if isinstance(error, gcp_exceptions.AlreadyExists):
        kind = WriterError.ALREADY_EXISTS
    elif isinstance(error, gcp_exceptions.PermissionDenied):
        kind = WriterError.PERMISSION_DENIED
    elif isinstance(error, gcp_exceptions.NotFound):
        kind = WriterError.NOT_FOUND
    else:
        kind = WriterError.UNKNOWN
    return WriterError(f"failed to {action} '{secret_name}': {error}", kind=kind, secret_name=secret_name)


class GCPSecretClient:
    """Wrapper around GCP Secret Manager client."""

    def __init__(self):
        self._client = None

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
            logger.info("Google client configured")
        return self._client

    def get_project_id(self) -> Optional[str]:
        """
        Get GCP project ID from the GCP_PROJECT environment variable.

        Returns:
            Project ID string, or None if not set
        """
        gcp_project_env = os.getenv("GCP_PROJECT")
        if gcp_project_env:
            logger.debug(f"Using GCP_PROJECT from environment: {gcp_project_env}")
            return gcp_project_env
        return None

    def create_secret(self, secret_name: str, project_id: str) -> str:
        """
        Create an empty secret container with automatic replication.

        Args:
            secret_name: Secret ID, already sanitized
            project_id: GCP project ID

        Returns:
            Resource name of the new secret (projects/*/secrets/*)

        Raises:
            WriterError: already_exists, permission_denied or unknown
        """
        try:
            secret = self.client.create_secret(
                request={
                    "parent": f"projects/{project_id}",
                    "secret_id": secret_name,
                    "secret": {"replication": {"automatic": {}}},
                }
            )
        except gcp_exceptions.GoogleAPIError as e:
            raise _writer_error("create secret", secret_name, e) from e
        return secret.name

    def add_version(self, secret_path: str, payload: bytes) -> str:
        """
        Attach a new version holding ``payload`` to an existing secret.

        Args:
            secret_path: Resource name returned by create_secret
            payload: Raw secret bytes

        Returns:
            Resource name of the new version
        """
        try:
            version = self.client.add_secret_version(
                request={"parent": secret_path, "payload": {"data": payload}}
            )
        except gcp_exceptions.GoogleAPIError as e:
            raise _writer_error("add secret version to", secret_path, e) from e
        return version.name

    def delete_secret(self, secret_name: str, project_id: str) -> None:
        """
        Delete a secret and all of its versions.

        Raises:
            WriterError: not_found, permission_denied or unknown
        """
        name = f"projects/{project_id}/secrets/{secret_name}"
        try:
            self.client.delete_secret(request={"name": name})
        except gcp_exceptions.GoogleAPIError as e:
            raise _writer_error("delete secret", secret_name, e) from e
