"""Request controllers for the accounts API."""
