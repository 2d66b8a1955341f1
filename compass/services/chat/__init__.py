from .service import chat_with_advisor

__all__ = ["chat_with_advisor"]
