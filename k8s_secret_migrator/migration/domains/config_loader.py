"""Configuration loader for k8s-secret-migrator."""
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "K8S_SECRET_MIGRATOR_CONFIG"


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    return Path.home() / ".config" / "k8s-secret-migrator" / "config.yml"


def _get_config_path(explicit_path: Optional[str] = None) -> Optional[str]:
    """
    Resolve which config file to read.

    Priority order:
    1. Path passed on the command line (--config)
    2. K8S_SECRET_MIGRATOR_CONFIG environment variable
    3. Default location: ~/.config/k8s-secret-migrator/config.yml

    Returns:
        Absolute path to config file, or None if no file is configured

    Raises:
        ConfigError: If an explicitly requested file doesn't exist
    """
    requested = explicit_path or os.getenv(CONFIG_ENV_VAR)
    if requested:
        config_path = Path(requested).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found at: {config_path}")
        logger.debug(f"Using config file: {config_path}")
        return str(config_path)

    default_config = default_config_path()
    if default_config.exists():
        logger.debug(f"Using default config location: {default_config}")
        return str(default_config)

    return None


def _validate_authentication(auth: Any, config_path: str) -> None:
    if not isinstance(auth, dict):
        raise ConfigError(f"'authentication' in {config_path} must be a mapping")

    auth_type = auth.get('type', 'service_account')
    if auth_type != 'service_account':
        raise ConfigError(
            f"Unsupported authentication type: {auth_type}\n"
            f"Only 'service_account' is supported."
        )

    if 'service_account_path' not in auth:
        raise ConfigError(
            "Missing 'authentication.service_account_path' in config\n"
            "Please specify the absolute path to your service account JSON file."
        )

    service_account_path = auth['service_account_path']
    if not os.path.exists(service_account_path):
        raise ConfigError(
            f"Service account file not found at: {service_account_path}\n"
            f"Please ensure the file exists or update the path in {config_path}"
        )
    if not os.path.isfile(service_account_path):
        raise ConfigError(f"Service account path is not a file: {service_account_path}")


def _normalize_exclude(migration: Dict[str, Any], config_path: str) -> None:
    """Accept migration.exclude as a comma-delimited string or a list of names."""
    exclude = migration.get('exclude')
    if exclude is None or isinstance(exclude, str):
        return
    if isinstance(exclude, list) and all(isinstance(name, str) for name in exclude):
        migration['exclude'] = ",".join(exclude)
        return
    raise ConfigError(
        f"'migration.exclude' in {config_path} must be a comma-delimited string or a list of secret names"
    )


def load_config(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate the optional YAML configuration.

    Every section is optional:
        - authentication: type and service_account_path
        - gcp: project_id
        - kubernetes: namespace, kubeconfig
        - migration: exclude

    Returns:
        Configuration dict, empty when no config file is present

    Raises:
        ConfigError: If the file is unreadable, malformed or references
            a missing service account file
    """
    config_path = _get_config_path(explicit_path)
    if config_path is None:
        logger.debug("No config file found, using command line flags only")
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    for section in ('gcp', 'kubernetes', 'migration'):
        if section in config and not isinstance(config[section], dict):
            raise ConfigError(f"'{section}' in {config_path} must be a mapping")

    if 'migration' in config:
        _normalize_exclude(config['migration'], config_path)

    if 'authentication' in config:
        _validate_authentication(config['authentication'], config_path)

    logger.debug(f"Configuration loaded successfully from {config_path}")
    return config


def apply_credentials(config: Dict[str, Any]) -> None:
    """Export the configured service account for google-auth to pick up."""
    auth = config.get('authentication') or {}
    service_account_path = auth.get('service_account_path')
    if service_account_path:
        os.environ['GOOGLE_APPLICATION_CREDENTIALS'] = service_account_path
        logger.info(f"Set GOOGLE_APPLICATION_CREDENTIALS from config: {service_account_path}")


def get_setting(config: Dict[str, Any], section: str, key: str) -> Optional[Any]:
    """Read ``config[section][key]`` or None."""
    return (config.get(section) or {}).get(key)
