"""Route modules."""

from emoji_rewriter.routes import emoji, health


__all__ = ["emoji", "health"]
