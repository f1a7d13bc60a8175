"""Identity bounded context.

Owns the canonical user record keyed by an external auth identity and the
lookup of user profiles from the identity provider.
"""
