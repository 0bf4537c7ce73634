"""Webflow forms service - guestbook, timeline and memory journal submissions into Webflow CMS."""

__version__ = "0.1.0"
