"""Event listing logic: date helpers, normalization, visibility and aggregation.

Submodules are imported directly (e.g. ``from faculty_portal.events.visibility
import EventFilter``) so that the record model can depend on the date helpers
without an import cycle.
"""
