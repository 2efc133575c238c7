"""Marathon race registration service."""
