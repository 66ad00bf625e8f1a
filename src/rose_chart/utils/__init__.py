"""
Utility functions for the rose chart workbench.
"""

from rose_chart.utils.logging import (
    setup_logging,
    log_system_info,
    log_operation,
    log_dataset_info,
)

__all__ = [
    'setup_logging',
    'log_system_info',
    'log_operation',
    'log_dataset_info',
]
