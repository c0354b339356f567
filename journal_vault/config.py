"""Configuration loading and vault registry."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from journal_vault.constants import CONFIG_PATH
from journal_vault.data_models import VaultConfiguration, VaultRegistry
from journal_vault.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _format_validation_error(name: str, exc: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return f"Vault '{name}' has invalid settings: {problems}"


def load_vault_registry(config_path: Path = CONFIG_PATH) -> VaultRegistry:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to
            ``$JOURNAL_VAULT_CONFIG`` or ``vaults.yaml`` next to the package.

    Returns:
        A :class:`VaultRegistry` with one validated :class:`VaultConfiguration`
        per vault and the configured default vault name.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or does
            not provide the expected structure (empty mapping, invalid
            entries, unknown default, etc.).
    """
    if not config_path.exists():
        raise ConfigurationError(f"Vault configuration file not found at {config_path}")

    try:
        raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Vault configuration at {config_path} is not valid YAML: {exc}") from exc

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Vault configuration must be a mapping with a 'vaults' key")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ConfigurationError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultConfiguration] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Vault '{name}' must map to a dictionary of settings")
        try:
            processed[str(name)] = VaultConfiguration(name=str(name), **{k: v for k, v in entry.items() if k != "name"})
        except ValidationError as exc:
            raise ConfigurationError(_format_validation_error(name, exc)) from exc

    default_vault = raw_config.get("default")
    if default_vault is None and len(processed) == 1:
        default_vault = next(iter(processed))
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ConfigurationError("Vault configuration must specify a 'default' vault present in the mapping")

    logger.info("Loaded %d vault(s) from %s (default '%s')", len(processed), config_path, default_vault)
    return VaultRegistry(default_vault=default_vault, vaults=processed)


@lru_cache(maxsize=1)
def get_vault_registry() -> VaultRegistry:
    """Load the registry on first use and reuse it for the server's lifetime."""
    return load_vault_registry(CONFIG_PATH)
