"""
UI components for TransTip.
"""
from transtip.ui.tooltip import TooltipManager
from transtip.ui.toast import ToastManager, ToastType
from transtip.ui.reader import ReaderWindow

__all__ = ['TooltipManager', 'ToastManager', 'ToastType', 'ReaderWindow']
