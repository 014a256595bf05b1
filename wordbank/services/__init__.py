"""Services built on top of the repository layer."""
