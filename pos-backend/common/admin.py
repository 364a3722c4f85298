from django.contrib import admin
from .models import Setting, LocaleStringResource


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value", "updated_at")
    search_fields = ("key", "value")


@admin.register(LocaleStringResource)
class LocaleStringResourceAdmin(admin.ModelAdmin):
    list_display = ("language", "name", "value")
    list_filter = ("language",)
    search_fields = ("name", "value")
