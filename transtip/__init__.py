"""
TransTip - translate selections with an external command and show the
result in a tooltip near the cursor.
"""
from transtip.constants import VERSION

__version__ = VERSION
