"""Match Profile management."""
