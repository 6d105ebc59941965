from django.contrib import admin
from .models import Household, HouseholdInvite, HouseholdMember


class HouseholdMemberInline(admin.TabularInline):
    model = HouseholdMember
    extra = 0
    raw_id_fields = ('user',)


@admin.register(Household)
class HouseholdAdmin(admin.ModelAdmin):
    list_display = ('name', 'created_at')
    search_fields = ('name',)
    inlines = [HouseholdMemberInline]


@admin.register(HouseholdInvite)
class HouseholdInviteAdmin(admin.ModelAdmin):
    list_display = ('household', 'email', 'invited_by', 'expires_at', 'created_at')
    search_fields = ('email', 'household__name')
    readonly_fields = ('token',)
