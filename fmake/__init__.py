"""fmake — build orchestration for Apple-platform binary frameworks."""

__version__ = "0.1.0"
