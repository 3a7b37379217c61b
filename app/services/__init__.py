from .assistant_service import GroqAssistant
from .auth_service import AuthService, SessionConfig
from .chat_service import ChatService

__all__ = ["AuthService", "ChatService", "GroqAssistant", "SessionConfig"]
