"""covpipe - run every Go package's tests with coverage and report one number."""

__version__ = "0.1.0"
