"""Application layer – tag-aware cache orchestration."""
