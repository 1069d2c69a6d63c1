import logging
import logging.config
from typing import Any, Dict, Optional


def setup_logger(logging_config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Применить dictConfig из конфигурации приложения"""
    if logging_config is None:
        from config import config
        if config.log_to_file:
            config.log_dir.mkdir(parents=True, exist_ok=True)
        logging_config = config.get_logging_config()
    logging.config.dictConfig(logging_config)
    return logging.getLogger()
