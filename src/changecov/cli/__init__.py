"""changecov command line interface."""
