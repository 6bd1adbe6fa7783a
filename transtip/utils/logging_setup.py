"""
Logging setup for TransTip.
"""
import os
import sys
import logging
import traceback
from datetime import datetime
from typing import Optional

from transtip.constants import VERSION, APP_NAME


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> str:
    """Setup logging to file and console for crash debugging.

    Args:
        log_dir: Directory for the daily log file (default: <config dir>/logs)
        level: Root logger level

    Returns:
        Path of the log file in use
    """
    if log_dir is None:
        from config import Config
        log_dir = os.path.join(Config.CONFIG_DIR, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, f'transtip_{datetime.now().strftime("%Y%m%d")}.log')

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    def exception_handler(exc_type, exc_value, exc_tb):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        logging.critical("Uncaught exception:", exc_info=(exc_type, exc_value, exc_tb))
        logging.critical("".join(traceback.format_exception(exc_type, exc_value, exc_tb)))

    sys.excepthook = exception_handler
    logging.info(f"{APP_NAME} v{VERSION} started")
    logging.info(f"Log file: {log_file}")

    return log_file
