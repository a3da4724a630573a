"""
Deterministic sample data inserted into an empty store.

Trips, activities and expenses refer to their owners by position in the
lists below; real ids are assigned at insert time.
"""

from __future__ import annotations

SAMPLE_DESTINATIONS = [
    ("Paris", "France"),
    ("Tokyo", "Japan"),
    ("New York", "USA"),
]

# (destination index, title, start, end)
SAMPLE_TRIPS = [
    (0, "Summer Vacation", "2025-06-01", "2025-06-10"),
    (0, "Winter Getaway", "2025-12-20", "2025-12-30"),
    (1, "Cherry Blossom Tour", "2025-04-01", "2025-04-10"),
    (1, "Business Trip", "2025-09-15", "2025-09-22"),
    (2, "Fall in NYC", "2025-10-05", "2025-10-12"),
    (2, "New Year's Eve", "2025-12-28", "2026-01-03"),
]

# (trip index, name, date, time, location)
SAMPLE_ACTIVITIES = [
    (0, "Eiffel Tower Tour", "2025-06-02", "10:00", "Eiffel Tower"),
    (0, "Louvre Museum Visit", "2025-06-03", "14:00", "Louvre Museum"),
    (1, "Christmas Markets", "2025-12-22", "18:00", "Champs-Élysées"),
    (1, "New Year's Eve Dinner", "2025-12-31", "20:00", "Le Jules Verne"),
    (2, "Hanami in Ueno Park", "2025-04-02", "11:00", "Ueno Park"),
    (2, "Shinjuku Gyoen Visit", "2025-04-03", "13:00", "Shinjuku Gyoen"),
    (3, "Business Meeting", "2025-09-16", "09:00", "Tokyo International Forum"),
    (3, "Networking Dinner", "2025-09-17", "19:00", "Ginza District"),
    (4, "Central Park Walk", "2025-10-06", "10:00", "Central Park"),
    (4, "Broadway Show", "2025-10-07", "19:30", "Broadway Theater"),
    (5, "Times Square New Year", "2025-12-31", "20:00", "Times Square"),
    (5, "Brooklyn Bridge Walk", "2026-01-01", "11:00", "Brooklyn Bridge"),
]

# (trip index, title, amount, date)
SAMPLE_EXPENSES = [
    (0, "Hotel Booking", 1200.00, "2025-06-01"),
    (0, "Dinner at Restaurant", 150.00, "2025-06-02"),
    (1, "Flights", 800.00, "2025-12-20"),
    (1, "New Year's Eve Celebration", 300.00, "2025-12-31"),
    (2, "Ryokan Stay", 900.00, "2025-04-01"),
    (2, "Sushi Dinner", 200.00, "2025-04-02"),
    (3, "Hotel", 1500.00, "2025-09-15"),
    (3, "Taxi Services", 120.00, "2025-09-16"),
    (4, "Manhattan Hotel", 1800.00, "2025-10-05"),
    (4, "Broadway Tickets", 250.00, "2025-10-07"),
    (5, "Times Square Package", 500.00, "2025-12-31"),
    (5, "New Year's Day Brunch", 150.00, "2026-01-01"),
]
