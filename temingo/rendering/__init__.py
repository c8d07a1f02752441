"""Template compilation, helper functions and output writing."""
