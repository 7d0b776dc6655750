"""HTTP engine for the diagnostic assistant."""
