"""
Auto-import all render mode modules to ensure registration side-effects run.

After importing this package, `registry.list_modes()` and `registry.create_mode()`
know about every available view.
"""
from __future__ import annotations

import importlib
import pkgutil

from quakeviz.render import modes as _modes_pkg

for _module in pkgutil.iter_modules(_modes_pkg.__path__, _modes_pkg.__name__ + "."):
    importlib.import_module(_module.name)
