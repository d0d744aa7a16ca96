"""idefiles: recover the files currently open in running editors and IDEs."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
