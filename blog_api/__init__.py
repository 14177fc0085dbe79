"""Blog platform backend: users, token sessions and the auth guard."""
