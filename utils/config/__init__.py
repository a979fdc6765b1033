#!/usr/bin/env python3
"""
Configuration Management Module

This module contains configuration and setup utilities including
YAML loading, logging setup, and filesystem helpers.
"""

from .helpers import (
    DEFAULT_CONFIG_PATH,
    load_config,
    setup_logging,
    ensure_directory_exists,
    validate_file_exists,
    save_results
)

__all__ = [
    'DEFAULT_CONFIG_PATH',
    'load_config',
    'setup_logging',
    'ensure_directory_exists',
    'validate_file_exists',
    'save_results'
]
