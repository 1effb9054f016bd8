"""extsecret command-line interface."""
