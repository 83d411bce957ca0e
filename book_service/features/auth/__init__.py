"""Sign-up and sign-in with bearer tokens."""
