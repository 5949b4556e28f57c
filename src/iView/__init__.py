"""iView: document and viewport engine for a desktop image viewer."""

__version__ = "0.1.0"
