"""Application services bound to one user namespace."""
