"""Auth, revocation and user-management services."""
