"""
Catalog Store Module.

Single source of truth for catalog items.
Manages items, their reviews, derived ratings, and locale reports.
"""
