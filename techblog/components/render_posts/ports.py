"""
Render posts component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class RulesPort(Protocol):
    """Port for accessing render rules configuration."""

    def get_prose_class(self) -> str:
        """Get CSS class for the document-wide prose container."""
        ...

    def get_code_block_class(self) -> str:
        """Get CSS class for code blocks."""
        ...

    def get_inline_code_class(self) -> str:
        """Get CSS class for inline code."""
        ...

    def get_quote_class(self) -> str:
        """Get CSS class for blockquotes."""
        ...

    def get_divider_class(self) -> str:
        """Get CSS class for horizontal rules."""
        ...
