"""
htmleffect - deferred innerHTML replacement for PyScript and server-side trees

The core is set_inner_html(): describe the content mutation now, run it later.
"""

from .content import Effect, set_inner_html
from .store import Store

__version__ = "0.1.0"

__all__ = ["Effect", "Store", "set_inner_html"]
