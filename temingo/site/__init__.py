"""Site building, rebuild cycles and watching."""
