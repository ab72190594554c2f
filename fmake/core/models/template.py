"""
Generated artifact model — returned by every manifest generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A rendered artifact that belongs at a fixed place in a bundle.

    Attributes:
        path:    Path relative to the framework (or build) root.
        content: Full file content.
        reason:  Human-readable origin, used in logs and CLI output.
    """

    path: str
    content: str
    reason: str = ""
