"""matrixops - shell-friendly matrix operations.

Subpackages:
- matrixops.math: Matrix value type and number types
- matrixops.core: configuration, logging and errors
- matrixops.cli: the ``matrix`` command
"""

__version__ = "0.1.0"

__all__ = []
