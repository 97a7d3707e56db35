"""Event form validation and the create/edit controller."""
