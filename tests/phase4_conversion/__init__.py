"""Phase 4: Configuration, orchestration and statistics."""
