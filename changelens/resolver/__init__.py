from changelens.resolver.resolver import resolve, resolve_token

__all__ = ["resolve", "resolve_token"]
