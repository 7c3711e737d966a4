import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from colorama import Fore, Style, just_fix_windows_console

from utils import constants

just_fix_windows_console()

class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for console output."""
    COLORS = {
        'DEBUG': Fore.WHITE + Style.DIM,
        'INFO': Fore.CYAN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT
    }
    RESET = Style.RESET_ALL

    def format(self, record):
        # Colour a copy so other handlers see the plain level name
        levelname = record.levelname
        if levelname not in self.COLORS:
            return super().format(record)
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        return super().format(colored)

class LoggingConfigurator:
    """Configures process-wide logging for applications using the loader."""

    def __init__(self, config: dict):
        self.config = config.get('logging', {}) or {}
        self.log_level = getattr(logging, str(self.config.get('level', constants.DEFAULT_LOG_LEVEL)).upper())
        self.log_dir = Path(self.config.get('log_dir', constants.DEFAULT_LOG_DIR))
        self.log_file = self.config.get('log_file', constants.DEFAULT_LOG_FILE)

    def setup(self) -> None:
        """Setup the root logger's handlers, replacing any existing ones."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)
        root_logger.handlers = []  # Clear existing

        if self.config.get('log_to_console', True):
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.log_level)

            if self.config.get('colorful_console', True):
                formatter = ColoredFormatter(constants.CONSOLE_LOG_FORMAT, datefmt=constants.LOG_DATE_FORMAT)
            else:
                formatter = logging.Formatter(constants.CONSOLE_LOG_FORMAT, datefmt=constants.LOG_DATE_FORMAT)

            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        if self.config.get('log_to_file', False):
            self._add_file_handler(root_logger, self.log_file)

    def _add_file_handler(self, logger: logging.Logger, filename: str):
        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.log_dir / filename
        handler = RotatingFileHandler(
            file_path,
            maxBytes=constants.LOG_FILE_MAX_BYTES,
            backupCount=constants.LOG_FILE_BACKUP_COUNT,
            encoding='utf-8'
        )
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(constants.FILE_LOG_FORMAT))
        logger.addHandler(handler)

    def get_logger(self, name: str = constants.LOGGER_NAME) -> logging.Logger:
        return logging.getLogger(name)
