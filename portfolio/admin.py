from django.contrib import admin
from .models import ContactMessage, Project, ProjectMedia, SiteConfig


class ProjectMediaInline(admin.TabularInline):
    model = ProjectMedia
    fields = ("type", "url", "order_index")
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("repo_name", "title", "stars", "forks", "featured", "visible", "order_index", "view_count")
    list_editable = ("featured", "visible", "order_index")
    list_filter = ("featured", "visible", "language")
    search_fields = ("repo_name", "title", "description")
    readonly_fields = ("stars", "forks", "view_count", "click_count", "created_at", "updated_at")
    inlines = [ProjectMediaInline]


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "subject", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "email", "subject", "message")
    actions = ["mark_read", "mark_archived"]

    @admin.action(description="Mark selected messages as read")
    def mark_read(self, request, queryset):
        queryset.update(status=ContactMessage.STATUS_READ)

    @admin.action(description="Archive selected messages")
    def mark_archived(self, request, queryset):
        queryset.update(status=ContactMessage.STATUS_ARCHIVED)


@admin.register(SiteConfig)
class SiteConfigAdmin(admin.ModelAdmin):
    list_display = ("key", "updated_at")
    search_fields = ("key",)
