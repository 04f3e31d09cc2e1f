"""Domain layer: friend records, reconciliation, and sync orchestration."""
