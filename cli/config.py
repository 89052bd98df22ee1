#!/usr/bin/env python3
"""
Configuration Management Module for RPC Health Check

Handles hierarchical configuration loading (defaults, config file, environment
variables, command-line overrides) and turns the merged result into the
connection settings used by the RPC transport.
"""

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from network.rpc import RPCConfig, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


# Environment variable prefix, e.g. RPCCHECK_RPC_TIMEOUT or RPCCHECK_BITCOIN_COOKIE_FILE
ENV_PREFIX = 'RPCCHECK_'

# Values passed to the node verbatim; never type-coerced
STRING_KEYS = [
    'bitcoin.username',
    'bitcoin.password',
    'bitcoin.cookie_file',
    'rpc.user_agent',
]

DEFAULT_CONFIG = {
    'rpc': {
        'timeout': DEFAULT_TIMEOUT,
        'user_agent': DEFAULT_USER_AGENT,
    },
    'bitcoin': {
        'username': None,
        'password': None,
        'cookie_file': None,
    },
}


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be loaded."""
    pass


class ConfigurationManager:
    """Manages hierarchical configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None,
                 environ: Optional[Dict[str, str]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit configuration file path (YAML or JSON)
            environ: Environment mapping (os.environ if None)
        """
        self.logger = logging.getLogger('rpc-check.config')
        self.config_file = config_file
        self.environ = os.environ if environ is None else environ
        self._config_cache = None
        self._config_sources = []

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from all sources in hierarchical order.

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigurationError: If the config file is missing or unreadable
        """
        if self._config_cache is not None:
            return self._config_cache

        configs = [DEFAULT_CONFIG]
        self._config_sources.append("defaults")

        if self.config_file:
            configs.append(self._load_config_file(Path(self.config_file)))
            self._config_sources.append(f"file:{self.config_file}")
            self.logger.debug(f"Loaded config from {self.config_file}")

        env_config = self._load_environment_variables()
        if env_config:
            configs.append(env_config)
            self._config_sources.append("environment")

        self._config_cache = self._deep_merge(*configs)
        self._expand_paths(self._config_cache)

        return self._config_cache

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path, 'r') as f:
                if path.suffix in ['.yml', '.yaml']:
                    data = yaml.safe_load(f)
                elif path.suffix == '.json':
                    data = json.load(f)
                else:
                    raise ConfigurationError(f"Unknown config file format: {path}")
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        for key, value in self.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # Section is the first segment; the rest is the key, so
            # RPCCHECK_BITCOIN_COOKIE_FILE -> {'bitcoin': {'cookie_file': ...}}
            config_key = key[len(ENV_PREFIX):].lower()
            if '_' not in config_key:
                self.logger.warning(f"Ignoring environment variable without section: {key}")
                continue

            section, name = config_key.split('_', 1)
            if f"{section}.{name}" not in STRING_KEYS:
                value = self._parse_env_value(value)
            env_config.setdefault(section, {})[name] = value

        return env_config

    def _parse_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(self, *dicts: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge multiple dictionaries."""
        result = {}

        for dictionary in dicts:
            for key, value in dictionary.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = self._deep_merge(result[key], value)
                elif isinstance(value, dict):
                    result[key] = self._deep_merge(value)
                else:
                    result[key] = value

        return result

    def _expand_paths(self, config: Dict[str, Any]):
        """Expand ~ and environment variables in path values."""
        for key, value in config.items():
            if isinstance(value, dict):
                self._expand_paths(value)
            elif isinstance(value, str) and key.endswith('file'):
                config[key] = os.path.expanduser(os.path.expandvars(value))

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'bitcoin.username')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self.load()

        for key in key_path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def set(self, key_path: str, value: Any):
        """
        Set configuration value by dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'rpc.timeout')
            value: Value to set
        """
        config = self.load()

        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            current = current.setdefault(key, {})

        current[keys[-1]] = value

    def apply_overrides(self, overrides: Dict[str, Any]):
        """Apply command-line overrides, skipping values that were not given."""
        for key_path, value in overrides.items():
            if value is not None:
                self.set(key_path, value)
                self.logger.debug(f"Override {key_path} from command line")

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        timeout = self.get('rpc.timeout')
        if (isinstance(timeout, bool) or not isinstance(timeout, (int, float))
                or not math.isfinite(timeout) or timeout <= 0):
            errors.append(f"RPC timeout must be a positive number, got {timeout!r}")

        if self.get('bitcoin.password') and not self.get('bitcoin.username'):
            errors.append("Bitcoin RPC password is set without a username")

        for key_path in STRING_KEYS:
            value = self.get(key_path)
            if value is not None and not isinstance(value, str):
                errors.append(f"{key_path} must be a string, got {value!r}; quote it in the config file")

        return errors

    def get_sources(self) -> List[str]:
        """Get list of configuration sources that were loaded."""
        self.load()
        return self._config_sources

    def build_rpc_config(self) -> RPCConfig:
        """
        Build transport settings from the merged configuration.

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))

        return RPCConfig(
            timeout=float(self.get('rpc.timeout')),
            username=self.get('bitcoin.username'),
            password=self.get('bitcoin.password'),
            cookie_file=self.get('bitcoin.cookie_file'),
            user_agent=self.get('rpc.user_agent') or DEFAULT_USER_AGENT,
        )
