from django.contrib import admin

from .models import AcademicPlan, AdvisorChatHistory, Assessment, CourseTracker, StudentProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "name", "role", "grade", "updated_at")
    list_filter = ("role", "grade")
    search_fields = ("name", "user__username", "user__email")


@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ("user", "type", "completed_at", "valid")
    list_filter = ("type", "valid", "completed_at")
    search_fields = ("user__username",)
    readonly_fields = ("responses", "results")


@admin.register(CourseTracker)
class CourseTrackerAdmin(admin.ModelAdmin):
    list_display = ("user", "cumulative_gpa", "total_credits", "updated_at")
    search_fields = ("user__username",)
    # Caches are rewritten from semesters on save.
    readonly_fields = ("cumulative_gpa", "total_credits", "created_at", "updated_at")


@admin.register(AcademicPlan)
class AcademicPlanAdmin(admin.ModelAdmin):
    list_display = ("user", "used_fallback", "parse_strategy", "provider", "model_name", "updated_at")
    list_filter = ("used_fallback", "parse_strategy", "provider")
    search_fields = ("user__username",)
    readonly_fields = ("warnings", "created_at", "updated_at")


@admin.register(AdvisorChatHistory)
class AdvisorChatHistoryAdmin(admin.ModelAdmin):
    list_display = ("user", "channel", "short_question", "short_answer", "fallback_used", "timestamp")
    list_filter = ("channel", "fallback_used", "timestamp")
    search_fields = ("question", "answer", "user__username")
    readonly_fields = ("user", "channel", "question", "answer", "fallback_used", "timestamp")

    def short_question(self, obj):
        return obj.question[:50] + "..." if len(obj.question) > 50 else obj.question
    short_question.short_description = "Question"

    def short_answer(self, obj):
        return obj.answer[:50] + "..." if len(obj.answer) > 50 else obj.answer
    short_answer.short_description = "Answer"
