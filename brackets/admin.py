from django.contrib import admin

from .models import Bracket, BracketGroup, Match


class BracketGroupInline(admin.TabularInline):
    model = BracketGroup
    extra = 0
    can_delete = False
    readonly_fields = ("number", "name", "bracket_size", "total_rounds", "participants_count")


@admin.register(Bracket)
class BracketAdmin(admin.ModelAdmin):
    list_display = (
        "tournament", "participants_count", "bracket_size", "number_of_groups",
        "bronze_match", "matches_count", "created_at",
    )
    list_filter = ("bronze_match", "seeding_mode")
    search_fields = ("tournament__name",)
    readonly_fields = ("generated_by", "created_at", "updated_at")
    inlines = [BracketGroupInline]

    def matches_count(self, obj):
        return obj.matches.count()
    matches_count.short_description = "Matches"


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = (
        "match_number", "bracket", "group", "round", "position_in_round",
        "participant1", "participant2", "status", "winner", "version",
    )
    list_filter = ("status", "is_bronze_match", "is_finalized")
    search_fields = ("bracket__tournament__name", "participant1__name", "participant2__name")
    list_select_related = ("bracket__tournament", "participant1", "participant2", "winner")
    readonly_fields = ("version", "updated_at")
