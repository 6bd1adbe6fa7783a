"""
Core modules for TransTip.
"""
from transtip.core.process import ProcessInvoker, ProcessHandle, ProcessSpawnFailure, invoke
from transtip.core.session import TranslationSession
from transtip.core.gap import GapSpec, PlainTextBoundaries, build_gap, fill_gap
from transtip.core.translation import SelectionTranslator, GappedTranslator

__all__ = [
    'ProcessInvoker', 'ProcessHandle', 'ProcessSpawnFailure', 'invoke',
    'TranslationSession',
    'GapSpec', 'PlainTextBoundaries', 'build_gap', 'fill_gap',
    'SelectionTranslator', 'GappedTranslator',
]
