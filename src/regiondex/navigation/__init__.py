"""Screen navigation history."""

from regiondex.navigation.stack import NavigationStack, Screen, ScreenKind

__all__ = ["NavigationStack", "Screen", "ScreenKind"]
