"""
CLI main entry point.

This module provides the main entry point for the TravelSync CLI,
delegating to the command orchestrator.
"""


def main() -> int:
    """
    Main entry point for TravelSync CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        # Import here to avoid circular imports
        from .orchestrator import app
        app()
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1
