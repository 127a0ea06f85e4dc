import os
import re
import logging
import logging.handlers
import unicodedata
import yaml
from typing import Dict, Any, Iterable, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_config(config_path: str = 'pdfresponse.yaml') -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config = get_default_config()
    try:
        if config_path and os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            for section, values in loaded.items():
                if isinstance(values, dict) and isinstance(config.get(section), dict):
                    config[section].update(values)
                else:
                    config[section] = values
    except (OSError, yaml.YAMLError) as e:
        logging.warning(f"Could not load config from {config_path}: {e}")
        config = get_default_config()

    # Override with environment variables
    config = apply_env_overrides(config)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        'pdf': {
            'page_format': 'A4',
            'orientation': 'P',
            'margins': '16,15,16,15,9,9',
            'author': 'pdfresponse',
            'display_zoom': 'default',
            'display_layout': 'continuous',
            'temp_dir': None,
            'multi_language': False,
            'ignore_styles_in_html': False,
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False,
            'log_filename': 'pdfresponse.log',
            'rotate_logs': True,
            'logs_dir': 'logs',
        },
    }


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'PDF_PAGE_FORMAT': ('pdf', 'page_format', str),
        'PDF_ORIENTATION': ('pdf', 'orientation', str),
        'PDF_MARGINS': ('pdf', 'margins', str),
        'PDF_AUTHOR': ('pdf', 'author', str),
        'PDF_TEMP_DIR': ('pdf', 'temp_dir', str),
        'LOG_LEVEL': ('logging', 'level', str),
        'DEBUG_MODE': ('logging', 'level', lambda x: 'DEBUG' if x.lower() == 'true' else config['logging']['level'])
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                config[section][key] = converted_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")

    return config


def setup_logging(logging_config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    # Configure logging
    root = logging.getLogger()
    root.setLevel(level)

    # Clear existing handlers
    root.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # File handler
    if logging_config.get('log_to_file', False):
        logs_dir = logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'pdfresponse.log'))

        if logging_config.get('rotate_logs', True):
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')

        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def webalize(text: Optional[str], fallback: str = 'document') -> str:
    """Turn arbitrary text into a lowercase, dash-separated, filesystem-safe slug."""
    normalized = unicodedata.normalize('NFKD', text or '')
    ascii_text = normalized.encode('ascii', 'ignore').decode('ascii').lower()
    slug = re.sub(r'[^a-z0-9]+', '-', ascii_text).strip('-')
    return slug or fallback


def try_call(callbacks: Optional[Iterable], *args, **kwargs) -> None:
    """Call each callback, logging and discarding any exception it raises.

    Hooks are fire-and-forget: a failing hook never aborts the caller.
    """
    if callbacks is None:
        return
    if callable(callbacks):
        callbacks = [callbacks]

    for callback in callbacks:
        if not callable(callback):
            logger.warning(f"Skipping non-callable hook: {callback!r}")
            continue
        try:
            callback(*args, **kwargs)
        except Exception as e:
            logger.warning(f"Hook {getattr(callback, '__name__', callback)!r} failed: {e}", exc_info=True)


def parse_key_values(pairs: Iterable[str]) -> Dict[str, str]:
    """Parse KEY=VALUE strings into a dict."""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        result[key.strip()] = value
    return result
