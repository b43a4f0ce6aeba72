"""wpm: package manager for the Well.. Simple programming language.

Import from submodules:
- version: __version__
- core.package_ops: install/update/uninstall/list/sync operations
- core.module_runner: module resolution and interpreter dispatch
"""

from wpm.version import __version__ as __version__
