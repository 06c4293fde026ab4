"""Pure analysis over plan text and filesystem snapshots."""
