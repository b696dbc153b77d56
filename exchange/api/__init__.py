"""HTTP API for the exchange devnet."""
