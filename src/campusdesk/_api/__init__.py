"""Internal API collaborators, one module per functional area."""
