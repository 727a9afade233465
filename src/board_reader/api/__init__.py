"""HTTP API for the board reader."""
