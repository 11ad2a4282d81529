"""Output layer — console port, Rich console factory and text formatting."""
