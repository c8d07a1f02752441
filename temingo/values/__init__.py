"""Values loading, merging and list objects."""
