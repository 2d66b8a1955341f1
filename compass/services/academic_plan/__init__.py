from .service import chat_about_plan, generate_academic_plan, get_academic_plan

__all__ = ["chat_about_plan", "generate_academic_plan", "get_academic_plan"]
