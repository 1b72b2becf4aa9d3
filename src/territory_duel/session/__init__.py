from .manager import SessionManager, Participant, ChatMessage

__all__ = ['SessionManager', 'Participant', 'ChatMessage']
