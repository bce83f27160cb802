from django.contrib import admin, messages
from django.utils.html import format_html

from .models import IncomeTaxReturn, TaxReturnStatus, VatReturn


# 1. 공통 믹스인
class TaxReturnAdminMixin:
    """
    신고서 관리 공통

    제출된 신고서는 관리자 화면에서도 수정 / 삭제할 수 없음
    """
    list_filter = ['status', 'tax_year', 'accounting_method']
    search_fields = ['user__username', 'first_name', 'last_name', 'resident_id', 'email']
    readonly_fields = ['signed_at', 'submitted_at', 'created_at', 'updated_at']
    list_select_related = ['user']

    def get_readonly_fields(self, request, obj=None):
        if obj is not None and not obj.is_editable:
            return [field.name for field in obj._meta.fields]
        return super().get_readonly_fields(request, obj)

    def has_delete_permission(self, request, obj=None):
        if obj is not None and not obj.is_editable:
            return False
        return super().has_delete_permission(request, obj)

    def delete_queryset(self, request, queryset):
        """일괄 삭제도 DRAFT만 (모델 delete() 경유)"""
        skipped = 0
        for tax_return in queryset:
            if tax_return.is_editable:
                tax_return.delete()
            else:
                skipped += 1
        if skipped:
            self.message_user(
                request, f'{skipped} submitted return(s) were not deleted.', messages.WARNING
            )

    @admin.display(description='Status', ordering='status')
    def get_status_colored(self, obj):
        color = 'gray' if obj.status == TaxReturnStatus.DRAFT else 'green'
        return format_html('<span style="color:{}; font-weight:bold;">{}</span>', color, obj.get_status_display())

    @admin.display(description='Total due', ordering='total_due')
    def get_total_due_display(self, obj):
        return f"${obj.total_due:,.2f}"


TAXPAYER_FIELDSET = ('Taxpayer', {
    'fields': (
        'user', 'status', 'tax_year',
        ('first_name', 'middle_initial', 'last_name'),
        'resident_id', 'email', 'accounting_method',
    )
})

ADDRESS_FIELDSET = ('Address', {
    'fields': ('address_line1', 'city', 'state', 'postal_code', 'country'),
    'classes': ('collapse',),
})

SIGNATURE_FIELDSET = ('Signature', {
    'fields': ('certification_accepted', 'signature_data', 'signed_at', 'submitted_at'),
    'classes': ('collapse',),
})


@admin.register(IncomeTaxReturn)
class IncomeTaxReturnAdmin(TaxReturnAdminMixin, admin.ModelAdmin):
    """소득세 신고서 관리"""
    list_display = [
        'tax_year', 'user', 'taxpayer_name', 'get_status_colored',
        'aggregate_presumed_income', 'get_total_due_display', 'submitted_at',
    ]
    ordering = ['-tax_year', '-created_at']

    fieldsets = [
        TAXPAYER_FIELDSET,
        ADDRESS_FIELDSET,
        ('Income', {
            'fields': ('employment_income', 'business_income', 'entity_distributions', 'income_sources')
        }),
        ('Calculation', {
            'fields': (
                'presumed_employment_income', 'presumed_business_income',
                'entity_distribution_deduction', 'aggregate_presumed_income', 'initial_tax',
                'mtc_credit', 'applied_credit', 'tax_liability',
                'penalties', 'interest', 'total_due',
            )
        }),
        ('Preparer', {
            'fields': ('preparer_name', 'preparer_email', 'preparer_phone', 'preparer_address'),
            'classes': ('collapse',),
        }),
        SIGNATURE_FIELDSET,
    ]


@admin.register(VatReturn)
class VatReturnAdmin(TaxReturnAdminMixin, admin.ModelAdmin):
    """부가세 신고서 관리"""
    list_display = [
        'tax_year', 'quarter', 'user', 'taxpayer_name', 'get_status_colored',
        'total_retail_sales', 'get_total_due_display', 'submitted_at',
    ]
    list_filter = ['status', 'tax_year', 'quarter']
    ordering = ['-tax_year', '-quarter']

    fieldsets = [
        TAXPAYER_FIELDSET,
        ADDRESS_FIELDSET,
        ('Period', {
            'fields': ('quarter', 'period_start', 'period_end')
        }),
        ('Calculation', {
            'fields': (
                'total_retail_sales', 'sales_breakdown', 'value_added', 'initial_vat',
                'mtc_credit', 'applied_credit', 'vat_liability',
                'penalties', 'interest', 'total_due',
            )
        }),
        SIGNATURE_FIELDSET,
    ]
