"""Configuration handling and the command line interface."""
