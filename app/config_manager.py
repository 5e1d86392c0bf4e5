"""
Configuration Manager for the G-Set library
Handles configuration values through environment variables (optionally seeded
from a .env file) and centralized defaults.
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any
from dataclasses import dataclass

from dotenv import load_dotenv

from error_handling import ConfigurationError
from serialization.canonical import GSetSerializer, DUPLICATE_POLICIES


@dataclass
class GSetConfig:
    """Configuration settings for G-Set replicas"""

    # Decoding
    duplicate_policy: str = "deduplicate"  # deduplicate, reject

    # Replica identity
    replica_id: Optional[str] = None

    # Logging Configuration
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_size: int = 10_000_000  # 10MB
    log_backup_count: int = 5


class GSetConfigManager:
    """Centralized configuration management"""

    def __init__(self, env_path: Optional[str] = None, setup_logging: bool = True):
        if env_path:
            load_dotenv(dotenv_path=env_path)
        self.config = GSetConfig()
        self._load_from_environment()
        self._validate_config()
        if setup_logging:
            self._setup_logging()

    def _load_from_environment(self):
        """Load configuration from environment variables"""
        try:
            self.config.duplicate_policy = os.getenv('GSET_DUPLICATE_POLICY', self.config.duplicate_policy).lower()
            self.config.replica_id = os.getenv('GSET_REPLICA_ID')

            self.config.log_level = os.getenv('GSET_LOG_LEVEL', self.config.log_level).upper()
            self.config.log_file = os.getenv('GSET_LOG_FILE')
            self.config.log_max_size = int(os.getenv('GSET_LOG_MAX_SIZE', self.config.log_max_size))
            self.config.log_backup_count = int(os.getenv('GSET_LOG_BACKUP_COUNT', self.config.log_backup_count))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e

    def _validate_config(self):
        """Validate configuration values"""
        errors = []

        if self.config.duplicate_policy not in DUPLICATE_POLICIES:
            errors.append(f"Invalid duplicate policy: {self.config.duplicate_policy}. Must be one of {list(DUPLICATE_POLICIES)}")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.config.log_level not in valid_log_levels:
            errors.append(f"Invalid log level: {self.config.log_level}. Must be one of {valid_log_levels}")

        if self.config.log_max_size <= 0:
            errors.append(f"Invalid log max size: {self.config.log_max_size}")

        if self.config.log_backup_count < 0:
            errors.append(f"Invalid log backup count: {self.config.log_backup_count}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}",
                                     context={'errors': errors})

    def _setup_logging(self):
        """Setup logging based on configuration"""
        log_level = getattr(logging, self.config.log_level)

        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if self.config.log_file:
            try:
                log_dir = os.path.dirname(self.config.log_file)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)

                file_handler = RotatingFileHandler(
                    self.config.log_file,
                    maxBytes=self.config.log_max_size,
                    backupCount=self.config.log_backup_count
                )
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                logging.warning(f"Could not setup file logging: {e}")

    def get_config(self) -> GSetConfig:
        """Get the current configuration"""
        return self.config

    def build_serializer(self) -> GSetSerializer:
        """Serializer honouring the configured duplicate policy"""
        return GSetSerializer(duplicate_policy=self.config.duplicate_policy)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration"""
        return {
            'duplicate_policy': self.config.duplicate_policy,
            'replica_id': self.config.replica_id,
            'log_level': self.config.log_level,
            'log_file': self.config.log_file,
        }
