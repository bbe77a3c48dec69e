"""On-chain protocol wrappers."""
