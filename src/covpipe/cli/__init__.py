"""covpipe command line interface."""
