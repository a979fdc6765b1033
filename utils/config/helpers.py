import yaml
import logging
import os
from typing import Dict, Any, Optional
import pandas as pd


DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__)))), 'climate_engine', 'config', 'config.yaml')


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML configuration file."""
    config_path = config_path or DEFAULT_CONFIG_PATH
    try:
        with open(config_path, 'r') as file:
            config = yaml.safe_load(file)
        return config or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file: {e}")


def setup_logging(config: Dict[str, Any]) -> None:
    """Set up logging configuration."""
    log_config = config.get('logging', {})
    level = getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO)
    format_str = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')

    handlers = [logging.StreamHandler()]
    if log_config.get('file'):
        log_dir = os.path.dirname(log_config['file'])
        if log_dir:
            ensure_directory_exists(log_dir)
        handlers.append(logging.FileHandler(log_config['file']))

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=handlers,
        force=True
    )


def ensure_directory_exists(path: str) -> None:
    """Create directory if it doesn't exist."""
    os.makedirs(path, exist_ok=True)


def validate_file_exists(file_path: str) -> bool:
    """Check if file exists."""
    return os.path.isfile(file_path)


def save_results(data: pd.DataFrame, file_path: str, format: str = 'csv') -> None:
    """Save results to file in specified format."""
    directory = os.path.dirname(file_path)
    if directory:
        ensure_directory_exists(directory)

    if format.lower() == 'csv':
        data.to_csv(file_path, index=False)
    elif format.lower() == 'pickle':
        data.to_pickle(file_path)
    else:
        raise ValueError(f"Unsupported format: {format}")
