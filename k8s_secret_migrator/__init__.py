"""Migrate Kubernetes secrets into GCP Secret Manager."""

__version__ = "0.1.0"
