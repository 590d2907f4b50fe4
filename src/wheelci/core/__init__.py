# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core types shared by every WheelCI layer (no I/O, no provider syntax)."""
