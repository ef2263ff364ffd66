"""Validation services: naming, presence and title-block checks, aggregation
and the audit orchestrator."""
