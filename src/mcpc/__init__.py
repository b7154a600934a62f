"""mcpc — list and call tools on a local Model Context Protocol provider."""

from __future__ import annotations

__version__ = "0.1.0"
