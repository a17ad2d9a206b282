"""Maven repository metadata client."""
