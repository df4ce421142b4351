"""Pointsboard: points tracking API with JWT auth, RBAC and token revocation."""
