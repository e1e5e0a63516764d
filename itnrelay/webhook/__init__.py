"""ITN signature checks and notification handling."""
