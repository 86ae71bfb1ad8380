"""Demo backend HTTP interface."""
