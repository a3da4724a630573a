"""
TravelSync - Local-first travel planner with remote sync.

Manages destinations, trips, activities and expenses in SQLite, enforces
the deletion rules between them, and merges data from a REST API.

Usage:
    # CLI (recommended)
    travelsync destinations list
    travelsync sync

    # Programmatic
    from travelsync.application.container import Container

    container = Container()
    planner = container.planner
    paris = planner.add_destination("Paris", "France")
"""

__version__ = "0.1.0"
__author__ = "TravelSync Team"

__all__ = ["__version__"]
