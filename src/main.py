"""
TravelSync - Local-first Travel Planner

Keeps destinations, trips, activities and expenses in a local SQLite
database and synchronizes them with the remote TravelPlanner API.
"""

import sys
from travelsync.interface.cli import main


if __name__ == "__main__":
    sys.exit(main())
