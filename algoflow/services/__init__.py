from .sessions import Session, SessionManager

__all__ = ["Session", "SessionManager"]
