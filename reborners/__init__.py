"""Building blocks of a small POSIX-style shell: tokenizing, command trees, builtins, execution and formatting."""

__version__ = "0.1.0"