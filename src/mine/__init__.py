"""mine — run your own scripts by short alias.

Scripts are registered once under an alias and later executed through
an interpreter chosen by file extension.  All state lives in a single
``config.toml`` file.
"""

from mine.version import __version__

__all__: list[str] = ["__version__"]
