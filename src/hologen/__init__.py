"""HoloGen: real-time displacement sculptures from a single image."""
