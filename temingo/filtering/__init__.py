"""Path exclusion and template discovery."""
