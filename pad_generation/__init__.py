"""Star-shaped (jagged) felt pad contour generation."""
