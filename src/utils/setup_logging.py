"""
Custom logging setup for Firebase Cloud Functions.

Deployed functions capture stdout and forward it to Cloud Logging, so the
root logger writes through print(). The local emulator gets a plain
StreamHandler instead.

Import and call setup_cloud_logging() once from main.py.
"""

import logging
import os
import sys


class CloudLoggingHandler(logging.Handler):
    """Logging handler that writes each record to stdout via print()."""

    def emit(self, record):
        try:
            msg = self.format(record)
            print(msg, file=sys.stdout)
        except Exception:
            self.handleError(record)


class CloudLoggingFormatter(logging.Formatter):
    """Formatter that prefixes the level name so Cloud Logging can pick severity."""

    def format(self, record):
        message = super().format(record)
        return f"{record.levelname}: {message}"


def is_emulator() -> bool:
    return bool(
        os.getenv("FIRESTORE_EMULATOR_HOST")
        or os.getenv("FIREBASE_AUTH_EMULATOR_HOST")
        or os.getenv("FUNCTIONS_EMULATOR")
    )


def setup_cloud_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger for Cloud Functions (or the emulator).

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler: logging.Handler
    if is_emulator():
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(levelname)-8s %(name)s: %(message)s")
    else:
        handler = CloudLoggingHandler()
        formatter = CloudLoggingFormatter("%(name)s: %(message)s")

    handler.setFormatter(formatter)
    handler.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    root_logger.info(
        "Logging configured for %s", "emulator" if is_emulator() else "Cloud Functions"
    )
    return root_logger
