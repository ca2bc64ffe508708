from django.contrib import admin

from .models import Tournament, TournamentTeam


class TournamentTeamInline(admin.TabularInline):
    model = TournamentTeam
    extra = 0
    autocomplete_fields = ("team",)
    fields = ("team", "seed", "registered_at")
    readonly_fields = ("registered_at",)


@admin.register(Tournament)
class TournamentAdmin(admin.ModelAdmin):
    list_display = (
        "name", "start_date", "status", "tournament_type", "seeding_mode",
        "admins_count", "participants_count", "winner"
    )
    list_filter = ("status", "tournament_type", "seeding_mode", "registration_open")
    search_fields = ("name",)
    filter_horizontal = ("admins",)
    inlines = [TournamentTeamInline]

    def admins_count(self, obj):
        return obj.admins.count()
    admins_count.short_description = "Admins"

    def participants_count(self, obj):
        return obj.participants.count()
    participants_count.short_description = "Teams"
