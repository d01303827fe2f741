"""Phase 5: Command line interface."""
