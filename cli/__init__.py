"""smfkit command line interface."""
