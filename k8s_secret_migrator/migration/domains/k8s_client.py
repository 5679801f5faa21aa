"""Kubernetes secret reader."""
import base64
import logging
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from .errors import ClusterAccessError
from .models import SourceSecret

logger = logging.getLogger(__name__)


def _to_source_secret(secret, namespace: str) -> SourceSecret:
    """Convert a V1Secret; the API returns data values base64 encoded."""
    data = {key: base64.b64decode(value) for key, value in (secret.data or {}).items()}
    return SourceSecret(
        name=secret.metadata.name,
        namespace=secret.metadata.namespace or namespace,
        data=data,
    )


class KubernetesSecretClient:
    """Reads secrets through the CoreV1 API.

    Uses in-cluster service account credentials when running in a pod and
    falls back to the local kubeconfig otherwise.
    """

    def __init__(self, kubeconfig: Optional[str] = None):
        self.kubeconfig = kubeconfig
        self._client = None

    @property
    def client(self) -> client.CoreV1Api:
        """Lazy-initialize client."""
        if self._client is None:
            self._load_config()
            self._client = client.CoreV1Api()
            logger.info("Kubernetes client configured")
        return self._client

    def _load_config(self) -> None:
        try:
            config.load_incluster_config()
            logger.debug("Using in-cluster Kubernetes configuration")
            return
        except ConfigException:
            logger.debug("Not running in a cluster, loading kubeconfig")

        try:
            config.load_kube_config(config_file=self.kubeconfig)
        except (ConfigException, OSError) as e:
            raise ClusterAccessError(f"failed to initialize Kubernetes API client: {e}") from e

    def list_secrets(self, namespace: str) -> List[SourceSecret]:
        """
        List every secret in a namespace.

        Raises:
            ClusterAccessError: If the API call fails
        """
        try:
            secret_list = self.client.list_namespaced_secret(namespace)
        except ApiException as e:
            raise ClusterAccessError(
                f"Issue interacting with Kubernetes in namespace '{namespace}': {e.status} {e.reason}"
            ) from e
        return [_to_source_secret(s, namespace) for s in secret_list.items]

    def get_secret(self, namespace: str, name: str) -> SourceSecret:
        """
        Read a single secret.

        Raises:
            ClusterAccessError: If the secret cannot be read
        """
        try:
            secret = self.client.read_namespaced_secret(name, namespace)
        except ApiException as e:
            raise ClusterAccessError(
                f"Failed to read secret '{name}' in namespace '{namespace}': {e.status} {e.reason}"
            ) from e
        return _to_source_secret(secret, namespace)
