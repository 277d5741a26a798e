"""Entry point for the kitchen-tracker Textual app."""

from __future__ import annotations

from kitchen_tracker.kitchen_app import KitchenTrackerApp
from kitchen_tracker.store import KitchenStore


def main() -> None:
    """Run the Textual application."""
    KitchenTrackerApp(KitchenStore.with_sample_data()).run()


if __name__ == "__main__":
    main()
