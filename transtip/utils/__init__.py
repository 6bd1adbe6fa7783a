"""
Utility modules for TransTip.
"""
from transtip.utils.logging_setup import setup_logging
from transtip.utils.single_instance import is_already_running

__all__ = ['setup_logging', 'is_already_running']
