"""Phase 1: Value model and error types."""
