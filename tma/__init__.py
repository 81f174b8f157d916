"""tma -- scaffolding helper for Tuist projects laid out as feature/core modules.

Quick usage::

    tma init MyApp
    cd MyApp
    tma create Profile --feature
"""

__version__ = "0.1.0"
