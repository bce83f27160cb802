from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'user',
        'get_email',
        'get_masked_resident_id',
        'city',
        'country',
        'created_at',
    ]

    list_display_links = ['user', 'get_email']

    list_filter = [
        'country',
        'created_at',
    ]

    search_fields = [
        'user__username',
        'user__email',
        'user__last_name',
        'resident_id',
    ]

    fieldsets = [
        ('Taxpayer', {
            'fields': ('user', 'middle_initial', 'resident_id', 'phone')
        }),
        ('Address', {
            'fields': ('address_line1', 'city', 'state', 'postal_code', 'country'),
            'classes': ('wide',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']

    @admin.display(description='Email')
    def get_email(self, obj):
        return obj.user.email

    @admin.display(description='Resident ID')
    def get_masked_resident_id(self, obj):
        return obj.get_masked_resident_id()
