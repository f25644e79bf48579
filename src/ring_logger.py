import os
import logging
from colorama import Fore, Style


class Logger:
    _loggers = {}
    _colors = [
        Fore.BLUE,
        Fore.GREEN,
        Fore.CYAN,
        Fore.MAGENTA,
        Fore.YELLOW,
        Fore.RED,
        Fore.WHITE,
    ]

    @staticmethod
    def _color_for_name(name: str) -> str:
        # str hash() is salted per process; sum of code points keeps colors stable
        idx = sum(map(ord, name)) % len(Logger._colors)
        return Logger._colors[idx]

    @staticmethod
    def get_logger(log_name: str, level="INFO", log_dir=None):
        """
        Returns the shared logger for log_name.

        Repeated calls return the same logger; the latest level applies and
        each new log_dir adds a file handler next to the existing ones.
        """
        logger = Logger._loggers.get(log_name)
        if logger is None:
            logger = logging.getLogger(log_name)
            logger.propagate = False

            color = Logger._color_for_name(log_name)
            console_handler = logging.StreamHandler()
            console_formatter = logging.Formatter(
                f"{color}%(asctime)s - %(name)s - %(levelname)s - %(message)s{Style.RESET_ALL}"
            )
            console_handler.setFormatter(console_formatter)
            logger.addHandler(console_handler)

            Logger._loggers[log_name] = logger

        logger.setLevel(level)

        if log_dir:
            Logger._add_file_handler(logger, log_dir)

        return logger

    @staticmethod
    def _add_file_handler(logger, log_dir):
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.abspath(os.path.join(log_dir, "log.log"))

        for handler in logger.handlers:
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
                return

        file_handler = logging.FileHandler(log_path)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    @staticmethod
    def close_all():
        """Closes and detaches every handler installed by get_logger."""
        for logger in Logger._loggers.values():
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        Logger._loggers.clear()
