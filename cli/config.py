"""Configuration management for the META Storage console."""

import json
import os
import shutil
from pathlib import Path
from typing import Optional

from common.constants import DEFAULT_TIMEOUT_SECONDS
from common.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.metastorage' / 'config.json'


class Config:
    """Manages console configuration stored in a JSON file."""

    DEFAULT_CONFIG = {
        "server_url": os.environ.get("STORAGE_SERVER_URL", "http://localhost:8080"),
        "client_id": os.environ.get("STORAGE_CLIENT_ID"),
        "secret": os.environ.get("STORAGE_SECRET"),
        "timeout": float(os.environ.get("STORAGE_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
    }

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.metastorage/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.config_path.exists():
            config = self.DEFAULT_CONFIG.copy()
            self._write(config)
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            backup_path = self.config_path.with_suffix('.json.bak')
            logger.warning(f"Unreadable config file {self.config_path}: {e}; backup at {backup_path}")
            try:
                shutil.copy(self.config_path, backup_path)
            except IOError as copy_error:
                logger.warning(f"Could not back up config file: {copy_error}")
            return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        config.update({k: v for k, v in data.items() if v is not None})
        return config

    def _write(self, data: dict) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump({k: v for k, v in data.items() if k != 'secret' and v is not None}, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not write config file {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file. The secret is never persisted."""
        self._write(self.data)

    def override(
        self,
        server_url: Optional[str] = None,
        client_id: Optional[str] = None,
        secret: Optional[str] = None,
    ) -> None:
        """
        Override connection settings for this session (e.g. from command-line arguments).
        """
        if server_url:
            self.data['server_url'] = server_url
        if client_id:
            self.data['client_id'] = client_id
        if secret:
            self.data['secret'] = secret

    def get_server_url(self) -> str:
        return self.data.get('server_url') or 'http://localhost:8080'

    def get_client_id(self) -> Optional[str]:
        return self.data.get('client_id')

    def get_secret(self) -> Optional[str]:
        return self.data.get('secret')

    def get_timeout(self) -> float:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return float(self.data.get('timeout', DEFAULT_TIMEOUT_SECONDS))

    def missing_identity(self) -> list[str]:
        """
        List identity settings that are still unset.

        Returns:
            Names of missing settings (empty when the client can be built)
        """
        return [name for name in ('client_id', 'secret') if not self.data.get(name)]
