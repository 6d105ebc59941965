from django.contrib import admin
from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'category', 'schedule_type', 'next_due_date', 'completion_count']
    list_filter = ['category', 'schedule_type']
    search_fields = ['title', 'user__email']
    raw_id_fields = ['user', 'household']
