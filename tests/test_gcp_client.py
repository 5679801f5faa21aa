"""Tests for the Secret Manager wrapper."""
from unittest import mock

import pytest
from google.api_core import exceptions as gcp_exceptions

from k8s_secret_migrator.migration.domains.errors import WriterError
from k8s_secret_migrator.migration.domains.gcp_client import GCPSecretClient


@pytest.fixture
def gcp_client():
    """GCPSecretClient with the underlying API client mocked out."""
    client = GCPSecretClient()
    client._client = mock.MagicMock()
    return client


class TestCreateSecret:
    """Test suite for create_secret and add_version."""

    def test_create_secret_request(self, gcp_client):
        secret = mock.Mock()
        secret.name = "projects/my-project/secrets/app-cfg-config-json"
        gcp_client.client.create_secret.return_value = secret

        handle = gcp_client.create_secret("app-cfg-config-json", "my-project")

        assert handle == "projects/my-project/secrets/app-cfg-config-json"
        gcp_client.client.create_secret.assert_called_once_with(
            request={
                "parent": "projects/my-project",
                "secret_id": "app-cfg-config-json",
                "secret": {"replication": {"automatic": {}}},
            }
        )

    def test_add_version_request(self, gcp_client):
        version = mock.Mock()
        version.name = "projects/my-project/secrets/s/versions/1"
        gcp_client.client.add_secret_version.return_value = version

        result = gcp_client.add_version("projects/my-project/secrets/s", b"payload")

        assert result == "projects/my-project/secrets/s/versions/1"
        gcp_client.client.add_secret_version.assert_called_once_with(
            request={"parent": "projects/my-project/secrets/s", "payload": {"data": b"payload"}}
        )

    def test_already_exists_mapped(self, gcp_client):
        gcp_client.client.create_secret.side_effect = gcp_exceptions.AlreadyExists("exists")

        with pytest.raises(WriterError) as exc_info:
            gcp_client.create_secret("s", "my-project")

        assert exc_info.value.kind == WriterError.ALREADY_EXISTS
        assert exc_info.value.secret_name == "s"

    def test_permission_denied_mapped(self, gcp_client):
        gcp_client.client.create_secret.side_effect = gcp_exceptions.PermissionDenied("nope")

        with pytest.raises(WriterError) as exc_info:
            gcp_client.create_secret("s", "my-project")

        assert exc_info.value.kind == WriterError.PERMISSION_DENIED

    def test_add_version_failure_is_unknown(self, gcp_client):
        gcp_client.client.add_secret_version.side_effect = gcp_exceptions.InternalServerError("boom")

        with pytest.raises(WriterError) as exc_info:
            gcp_client.add_version("projects/p/secrets/s", b"x")

        assert exc_info.value.kind == WriterError.UNKNOWN


class TestDeleteSecret:
    """Test suite for delete_secret."""

    def test_delete_request(self, gcp_client):
        gcp_client.delete_secret("app-cfg-config-json", "my-project")

        gcp_client.client.delete_secret.assert_called_once_with(
            request={"name": "projects/my-project/secrets/app-cfg-config-json"}
        )

    def test_not_found_mapped(self, gcp_client):
        gcp_client.client.delete_secret.side_effect = gcp_exceptions.NotFound("missing")

        with pytest.raises(WriterError) as exc_info:
            gcp_client.delete_secret("s", "my-project")

        assert exc_info.value.kind == WriterError.NOT_FOUND
        assert "delete secret" in str(exc_info.value)


class TestProjectId:
    """Test suite for project id detection."""

    def test_project_from_env(self, monkeypatch):
        monkeypatch.setenv("GCP_PROJECT", "env-project")

        assert GCPSecretClient().get_project_id() == "env-project"

    def test_no_project(self, monkeypatch):
        monkeypatch.delenv("GCP_PROJECT", raising=False)

        assert GCPSecretClient().get_project_id() is None

    def test_client_created_lazily(self):
        with mock.patch(
            "k8s_secret_migrator.migration.domains.gcp_client.secretmanager.SecretManagerServiceClient"
        ) as client_cls:
            client = GCPSecretClient()
            client_cls.assert_not_called()

            assert client.client is client_cls.return_value
            assert client.client is client_cls.return_value
            client_cls.assert_called_once_with()


class TestWriterError:
    """Test suite for WriterError defaults."""

    def test_defaults(self):
        error = WriterError("boom")

        assert error.kind == WriterError.UNKNOWN
        assert error.secret_name is None
        assert str(error) == "boom"
