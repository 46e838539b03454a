"""CSV batch adapter: puzzles in, reconstructed queues out."""
