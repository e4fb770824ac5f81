"""
Observability module for netlaunch.

Structured logging only: JSON lines in production, rich console output
in a terminal. Workflow runs bind a run_id carried by every record they emit.
"""
