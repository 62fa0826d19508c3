#!/usr/bin/env python3

import os
import json
from pathlib import Path

import logging
import sys

logger = logging.getLogger("marketplace_mcp")

LOG_FORMAT = "%(levelname)s: %(message)s"


def setup_logging(level="INFO"):
    """Configure logging for the server.

    Logs always go to stderr: stdout carries the JSON-RPC stream when the
    server runs over stdio.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ],
        force=True,
    )


def get_config_path():
    """Get the path to the server configuration file.

    Checks in order:
    1. MARKETPLACE_MCP_CONFIG environment variable
    2. ~/.marketplace-mcp/config.json
    """
    if 'MARKETPLACE_MCP_CONFIG' in os.environ:
        path = Path(os.environ['MARKETPLACE_MCP_CONFIG'])
        if path.exists():
            return path

    return Path.home() / '.marketplace-mcp' / 'config.json'


def load_config():
    """Load configuration from file and environment."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
            config = merge_configs(config, file_config)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")

    config = apply_env_overrides(config)

    # PORT is honoured for container deployments
    if os.environ.get('PORT', '').isdigit():
        config['server']['port'] = int(os.environ['PORT'])

    return config


def get_default_config():
    """Get the default configuration."""
    return {
        "server": {
            "name": "marketplace-mcp-server",
            "host": "localhost",
            "port": 8765,
        },
        "client": {
            "timeout": 30,
            "api_url": "",
        },
        "logging": {
            "level": "INFO",
        },
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


ENV_PREFIX = "MARKETPLACE_MCP_"


def _coerce_env_value(value):
    lowered = value.lower()
    if lowered in ('true', 'yes', 'on'):
        return True
    if lowered in ('false', 'no', 'off'):
        return False
    if value.isdigit():
        return int(value)
    return value


def _set_path(config, parts, value):
    """
    Set a nested key named by underscore-split ``parts``.

    Config keys may themselves contain underscores (``api_url``), so at
    each level the longest key matching the next parts is taken. Unknown
    keys are ignored rather than created.
    """
    level = config
    while parts:
        candidates = [
            key for key in level
            if parts[:len(key.split('_'))] == key.split('_')
        ]
        if not candidates:
            return False

        key = max(candidates, key=lambda k: len(k.split('_')))
        rest = parts[len(key.split('_')):]

        if not rest:
            level[key] = value
            return True
        if not isinstance(level[key], dict):
            return False

        level = level[key]
        parts = rest

    return False


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: MARKETPLACE_MCP_SECTION_KEY
    For example: MARKETPLACE_MCP_CLIENT_TIMEOUT=60
    """
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX) or env_key == 'MARKETPLACE_MCP_CONFIG':
            continue

        parts = env_key[len(ENV_PREFIX):].lower().split('_')
        if not _set_path(config, parts, _coerce_env_value(value)):
            logger.debug(f"Ignoring unknown config override {env_key}")

    return config
