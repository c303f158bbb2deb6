"""Music sight-reading trainer."""
