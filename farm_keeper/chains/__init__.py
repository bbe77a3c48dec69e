"""Chain connection helpers."""
