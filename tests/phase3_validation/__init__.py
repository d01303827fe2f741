"""Phase 3: Depth/cycle guard and output validation."""
