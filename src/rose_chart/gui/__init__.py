"""
GUI package for the rose chart workbench.

PyQt6 desktop host that paints rose chart scenes with QPainter.
"""

from rose_chart.gui.main_window import MainWindow

__all__ = ["MainWindow"]
