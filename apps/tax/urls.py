from django.urls import path
from . import views

app_name = 'tax'

urlpatterns = [
    # 소득세 (Form 1)
    path('income/new/', views.income_tax_create, name='income_tax_create'),
    path('income/preview/', views.income_tax_preview, name='income_tax_preview'),
    path('income/<int:pk>/', views.income_tax_detail, name='income_tax_detail'),
    path('income/<int:pk>/edit/', views.income_tax_update, name='income_tax_update'),
    path('income/<int:pk>/submit/', views.income_tax_submit, name='income_tax_submit'),
    path('income/<int:pk>/delete/', views.income_tax_delete, name='income_tax_delete'),

    # 부가세 (Form 3)
    path('vat/new/', views.vat_create, name='vat_create'),
    path('vat/preview/', views.vat_preview, name='vat_preview'),
    path('vat/<int:pk>/', views.vat_detail, name='vat_detail'),
    path('vat/<int:pk>/edit/', views.vat_update, name='vat_update'),
    path('vat/<int:pk>/submit/', views.vat_submit, name='vat_submit'),
    path('vat/<int:pk>/delete/', views.vat_delete, name='vat_delete'),

    # 엑셀 내보내기
    path('export/', views.export_returns, name='export_returns'),
]
