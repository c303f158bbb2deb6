"""Screens: the View protocol, ViewManager, and the menu, game and stats views."""

from sightreader.views.base import View, ViewAction, ViewContext, ViewManager

__all__ = ["View", "ViewAction", "ViewContext", "ViewManager"]
