"""DecodeDesk command line interface."""
