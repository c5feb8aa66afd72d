"""HTTP clients for the process-management site and its search service."""
