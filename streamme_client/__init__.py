"""StreamMe OAuth2 authorization code flow demo."""
