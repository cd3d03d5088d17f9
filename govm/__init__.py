"""
govm - a shim-based Go version manager.

Installs Go releases side by side, resolves which release applies in the
current directory, and routes ``go``/``gofmt`` invocations to it.
"""

__version__ = "0.1.0"
