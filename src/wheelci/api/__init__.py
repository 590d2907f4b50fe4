# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public WheelCI API (stable surface).

This module exposes a small, typed API for integrations that already resolved
the project's bridge model and name (typically from its manifest) and want the
pipeline text back.

Versioning policy
-----------------
- The signatures here follow semver.
- Adding optional parameters with defaults is allowed in minor releases.
- Removing/renaming anything here is a breaking change (major release).

Notes:
-----
- `generate` mirrors the ``generate-ci`` command: provider and platforms may be
  enum members or tokens, and are normalized into a frozen `GenerateConfig`.
- `generate_from_config` takes that frozen snapshot directly, e.g. one built
  with `MutableGenerateConfig.from_toml_file(...).freeze()`.
- `build_graph` stops before rendering and returns the provider-neutral graph.
- Writing the text to a file is left to the caller.

```python
from wheelci import Bindings, api

text = api.generate("github", Bindings("pyo3"), "example", True, ["all"], pytest_flag=True)
```
"""

from __future__ import annotations

from wheelci.api.runtime import build_graph, generate, generate_from_config

__all__ = ["build_graph", "generate", "generate_from_config"]
