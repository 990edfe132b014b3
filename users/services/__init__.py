from .clinician import resolve_default_initials

__all__ = ["resolve_default_initials"]
