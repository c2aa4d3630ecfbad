"""HTTP API for submitting Takeout archives and fetching their exports."""
