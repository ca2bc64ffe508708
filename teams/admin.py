from django.contrib import admin
from .models import Team


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "tag", "kind", "captain", "created_at")
    list_filter = ("kind",)
    search_fields = ("name", "tag")
