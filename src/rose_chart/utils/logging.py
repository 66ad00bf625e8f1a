"""
Logging configuration for the rose chart workbench.

Provides file and console logging with system information capture for
debugging and troubleshooting.
"""

import logging
import sys
import platform
from pathlib import Path
from typing import Union


def setup_logging(log_file: Union[str, Path] = "rose_chart.log",
                  level: int = logging.DEBUG) -> None:
    """
    Configure logging for the application.

    Sets up file-based logging at ``level``, mirrors INFO and above to the
    console, and records system information on startup.

    Args:
        log_file: Path to log file (default: "rose_chart.log")
        level: Logging level (default: logging.DEBUG)

    Example:
        >>> setup_logging()
        >>> logging.info("Application started")
    """
    # Create logs directory if it doesn't exist
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        filename=str(log_path),
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(console_formatter)
    logging.getLogger().addHandler(console_handler)

    log_system_info()


def log_system_info() -> None:
    """Log platform and interpreter details for troubleshooting."""
    logging.info("=" * 60)
    logging.info("Rose Chart - System Information")
    logging.info("=" * 60)
    logging.info(f"Platform: {platform.system()} {platform.release()}")
    logging.info(f"Machine: {platform.machine()}")
    logging.info(f"Python version: {sys.version}")
    logging.info(f"Python executable: {sys.executable}")
    logging.info("=" * 60)


def log_operation(operation: str, details: str, level: int = logging.INFO) -> None:
    """
    Log an operation with details.

    Args:
        operation: Name of the operation (e.g., "load_dataset", "export_png")
        details: Additional details about the operation
        level: Logging level (default: logging.INFO)

    Example:
        >>> log_operation("export_svg", "chart.svg written")
    """
    logging.log(level, f"{operation}: {details}")


def log_dataset_info(path: Union[str, Path], dataset) -> None:
    """
    Log a summary of a loaded dataset.

    Args:
        path: File the dataset was loaded from
        dataset: The loaded Dataset
    """
    logging.info(f"Dataset: {path}")
    if dataset.data_source:
        logging.info(f"Source: {dataset.data_source}")
    logging.info(
        f"Observations: {dataset.summary.total} "
        f"({len(dataset.hourly)} hourly slots, {len(dataset.blocks)} blocks, "
        f"{dataset.day_count} days)"
    )
