"""
Main entry point for the rose chart workbench.

Without ``--report`` the PyQt6 GUI is launched, optionally opening a
dataset given on the command line. With ``--report`` the dataset's
statistics are printed to the console and no window is created.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rose_chart import __version__
from rose_chart.core.errors import RoseChartError
from rose_chart.core.settings import get_settings
from rose_chart.core.view_resolver import ViewMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rose-chart",
        description="Rose chart of event counts by time of day.",
    )
    parser.add_argument(
        "dataset",
        nargs="?",
        type=Path,
        help="Circular statistics JSON document to open.",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print the statistics report to the console instead of opening a window.",
    )
    parser.add_argument(
        "--view",
        default="hourly",
        help="Initial view: hourly, blocks, daily or daily:N (default: hourly).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: the settings directory).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Write DEBUG messages to the log file.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def run_report(dataset_path: Path, peak_count: int = 4) -> int:
    """Print the console report for a dataset file."""
    from rose_chart.analysis.reporter import print_report
    from rose_chart.core.dataset import load_dataset

    try:
        dataset = load_dataset(dataset_path)
    except (RoseChartError, OSError) as e:
        logger.error(f"Cannot report on {dataset_path}: {e}")
        return 1

    print_report(dataset, peak_count=peak_count)
    return 0


def run_gui(dataset_path: Optional[Path], view_mode: ViewMode) -> int:
    """
    Launch the PyQt6 application.

    Qt is imported here so that the report path works without a display.
    """
    from PyQt6.QtWidgets import QApplication
    from PyQt6.QtCore import Qt

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.Round
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Rose Chart")
    app.setApplicationVersion(__version__)
    app.setOrganizationName("Rose Chart")

    from rose_chart.gui import MainWindow

    main_window = MainWindow()
    if dataset_path is not None and main_window.open_dataset(dataset_path):
        main_window.get_controller().set_view_mode(view_mode)
    main_window.show()

    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ``rose-chart`` command.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    from rose_chart.utils import setup_logging
    setup_logging(
        log_file=args.log_file or settings.logging.get_log_file(),
        level=logging.DEBUG if args.verbose else settings.logging.get_level(),
    )

    try:
        view_mode = ViewMode.parse(args.view)
    except RoseChartError as e:
        logger.error(str(e))
        return 1

    if args.report:
        if args.dataset is None:
            parser.error("--report requires a dataset file")
        return run_report(args.dataset, settings.chart.peak_count)

    return run_gui(args.dataset, view_mode)


if __name__ == "__main__":
    sys.exit(main())
