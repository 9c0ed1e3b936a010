from django.contrib import admin
from .models.institution import Faculty, Department, PlacementOrganization


class DepartmentInline(admin.TabularInline):
    model = Department
    extra = 0


@admin.register(Faculty)
class FacultyAdmin(admin.ModelAdmin):
    list_display = ("name", "code")
    search_fields = ("name", "code")
    inlines = [DepartmentInline]


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "faculty")
    list_filter = ("faculty",)
    search_fields = ("name", "code")


@admin.register(PlacementOrganization)
class PlacementOrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "state", "email")
    search_fields = ("name", "city", "state")
