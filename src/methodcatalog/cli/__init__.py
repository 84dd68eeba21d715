"""Method catalog command-line interface."""
