"""Shared utilities: config, logger, retry, json_utils."""

from utils.config import AppConfig, LLMConfig, load_config
from utils.logger import setup_logging, log_structured
from utils.retry import with_retry
from utils.json_utils import parse_json_object

__all__ = [
    "AppConfig",
    "LLMConfig",
    "load_config",
    "setup_logging",
    "log_structured",
    "with_retry",
    "parse_json_object",
]
